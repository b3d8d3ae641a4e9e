"""Store Queries — read-only product and invoice listings for the rendering layer.

Invariants:
    - Never writes; caller owns the session
    - list_invoices() yields one row per (invoice, order line) pair, inner joins only
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.models.invoice import Invoice
from storefront.models.order_line import OrderLine
from storefront.models.product import Product


class StoreQueries:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_products(self) -> list[Product]:
        result = await self.db.execute(select(Product).order_by(Product.id))
        return list(result.scalars().all())

    async def list_invoices(self) -> list[dict]:
        """Invoices joined with their order lines and products."""
        query = (
            select(
                Invoice.id.label("factura_id"),
                Invoice.orden_id,
                Invoice.fecha,
                Invoice.total,
                OrderLine.cliente_nombre,
                OrderLine.cliente_email,
                OrderLine.cliente_direccion,
                Product.name.label("producto_nombre"),
                Product.url.label("producto_url"),
                OrderLine.cantidad.label("producto_cantidad"),
            )
            .join(OrderLine, Invoice.orden_id == OrderLine.orden_id)
            .join(Product, OrderLine.producto_id == Product.id)
            .order_by(Invoice.id, OrderLine.id)
        )
        result = await self.db.execute(query)
        return [dict(row) for row in result.mappings().all()]
