"""Product ORM — catalog item mirrored from the catalog source, with on-hand stock.

Invariants:
    - id is the catalog source's identifier (no autoincrement)
    - cantidad starts at 0 on insert; only order commits change it
    - Rows are never deleted by this system

Design Decisions:
    - name indexed: order commit resolves products by name, not by client id
"""

from sqlalchemy import String, Integer
from sqlalchemy.orm import Mapped, mapped_column

from storefront.db.base import Base


class Product(Base):
    """Catalog product with on-hand quantity."""
    __tablename__ = "productos"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=False,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    url: Mapped[str] = mapped_column(String(500), nullable=False)
    cantidad: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
