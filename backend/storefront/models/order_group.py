"""OrderGroup ORM — one row per committed order; its id is the orderGroupId.

Invariants:
    - id is allocated by the store (autoincrement), strictly increasing
    - Inserted in the same transaction as its OrderLines; rolled back with them

Design Decisions:
    - Dedicated sequence table instead of SELECT MAX(orden_id) + 1: two concurrent
      commits can never compute the same id
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from storefront.db.base import Base


class OrderGroup(Base):
    """Allocates order group identifiers."""
    __tablename__ = "orden_grupos"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
