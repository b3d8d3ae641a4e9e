"""Database Infrastructure — SQLAlchemy declarative Base shared by all ORM models.

Invariants:
    - Single async engine per process (initialized via infrastructure.database.init_db)
"""
