"""API Schemas — Pydantic models for request/response bodies at the HTTP boundary."""
