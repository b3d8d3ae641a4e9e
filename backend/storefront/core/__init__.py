"""Core Layer — pure domain logic: types, errors, parsing, batching.

Invariants:
    - No IO here: no HTTP, no DB, no filesystem
    - Core never imports from infrastructure/, services/ or api/
"""
