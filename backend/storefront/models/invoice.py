"""Invoice ORM — billing record for an order group (read-only for this service).

Invariants:
    - orden_id points at the order group the invoice bills
    - Rows are written by the billing side, never by order commit
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import Integer, DateTime, Numeric, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from storefront.db.base import Base


class Invoice(Base):
    """Invoice header."""
    __tablename__ = "facturas"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    orden_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("orden_grupos.id"), nullable=False, index=True,
    )
    fecha: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    total: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
