"""Services Layer — orchestrates core logic around IO (HTTP, DB, files).

Invariants:
    - Services receive their collaborators at construction (no module globals)
    - Transactions are opened here, never in routes
"""
