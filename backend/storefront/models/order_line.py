"""OrderLine ORM — one selected product within one committed order.

Invariants:
    - orden_id references orden_grupos.id; all lines of one commit share it
    - producto_id references an existing productos row at commit time
    - Never updated or deleted by this system

Design Decisions:
    - Surrogate id primary key: (orden_id, producto_id) may repeat if the same
      product is selected twice in one form
    - Buyer fields denormalized per line, matching the existing ordenes schema
"""

from sqlalchemy import String, Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from storefront.db.base import Base


class OrderLine(Base):
    """Persisted order line."""
    __tablename__ = "ordenes"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    orden_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("orden_grupos.id"), nullable=False, index=True,
    )
    producto_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("productos.id"), nullable=False,
    )
    cantidad: Mapped[int] = mapped_column(Integer, nullable=False)
    cliente_nombre: Mapped[str] = mapped_column(String(200), nullable=False)
    cliente_email: Mapped[str] = mapped_column(String(200), nullable=False)
    cliente_direccion: Mapped[str] = mapped_column(String(500), nullable=False)
