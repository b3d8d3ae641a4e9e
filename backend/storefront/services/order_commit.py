"""Order Commit Coordinator — validates, persists, decrements stock, exports, commits.

Invariants:
    - Validation completes before any store access; invalid input opens no transaction
    - One transaction covers group allocation, every OrderLine, every stock
      decrement and the export staging; nothing is visible unless all of it succeeds
    - orderGroupId comes from the orden_grupos autoincrement key, so concurrent
      commits can never share an id
    - Products are resolved by name; a name with no product is skipped, not fatal
    - A failure while writing the export rolls the transaction back and surfaces
      as ExportError
    - The export file is put in place only after the store commit succeeds; a
      failed commit discards the staged file
    - Stock is decremented without a floor: cantidad may go negative

Design Decisions:
    - Export is staged after the writes and before commit, then published after
      it, both through asyncio.to_thread (blocking file IO off the event loop)
    - A publish failure after commit cannot undo the order: it is logged with the
      group id and raised as ExportError
    - The export lists every validated record with the submitted values, including
      skipped names, matching what the client ordered
"""

import asyncio
import logging
from collections.abc import Mapping, Sequence

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.domain_types import (
    Buyer, CommitResult, OrderGroupId, OrderRecord, ProductId,
)
from storefront.core.errors import ExportError
from storefront.core.parse_order import parse_buyer, parse_order_records
from storefront.core.repository_protocols import OrderExporter
from storefront.infrastructure.database import DatabaseSessionManager
from storefront.models.order_group import OrderGroup
from storefront.models.order_line import OrderLine
from storefront.models.product import Product

logger = logging.getLogger(__name__)


class OrderCommitCoordinator:
    """Turns a submitted order form into persisted order lines plus an export file."""

    def __init__(self, db_manager: DatabaseSessionManager, exporter: OrderExporter):
        self._db = db_manager
        self._exporter = exporter

    async def commit_order(
        self,
        selected_products: Sequence[str] | str | None,
        quantities: Mapping[str, str | int | None],
        cliente_nombre: str | None,
        cliente_email: str | None,
        cliente_direccion: str | None,
    ) -> CommitResult:
        buyer = parse_buyer(cliente_nombre, cliente_email, cliente_direccion)
        records = parse_order_records(selected_products, quantities)
        return await self._persist(records, buyer)

    async def _persist(
        self, records: list[OrderRecord], buyer: Buyer,
    ) -> CommitResult:
        skipped: list[str] = []
        staged: str | None = None
        try:
            async with self._db.transaction() as db:
                group = OrderGroup()
                db.add(group)
                await db.flush()
                order_group_id = OrderGroupId(group.id)

                for record in records:
                    product_id = await self._resolve_product(db, record)
                    if product_id is None:
                        logger.warning(
                            f"Product not found, skipping line: {record.name}",
                            extra={
                                "order_group_id": order_group_id,
                                "product_name": record.name,
                            },
                        )
                        skipped.append(record.name)
                        continue
                    db.add(OrderLine(
                        orden_id=order_group_id,
                        producto_id=product_id,
                        cantidad=record.quantity,
                        cliente_nombre=buyer.name,
                        cliente_email=buyer.email,
                        cliente_direccion=buyer.address,
                    ))
                    await db.execute(
                        update(Product)
                        .where(Product.id == product_id)
                        .values(cantidad=Product.cantidad - record.quantity)
                    )
                await db.flush()

                staged = await asyncio.to_thread(self._exporter.stage, records)
        except BaseException:
            if staged is not None:
                await asyncio.to_thread(self._exporter.discard, staged)
            raise

        try:
            export_path = await asyncio.to_thread(self._exporter.publish, staged)
        except ExportError:
            logger.error(
                "Order committed but its export could not be published",
                extra={"order_group_id": order_group_id},
            )
            raise

        committed = len(records) - len(skipped)
        logger.info(
            f"Order committed: {committed} line(s), {len(skipped)} skipped",
            extra={"order_group_id": order_group_id},
        )
        return CommitResult(
            order_group_id=order_group_id,
            export_path=export_path,
            lines_committed=committed,
            skipped=skipped,
        )

    async def _resolve_product(
        self, db: AsyncSession, record: OrderRecord,
    ) -> ProductId | None:
        """Look the product up by name; the client-supplied id is not trusted."""
        result = await db.execute(
            select(Product.id)
            .where(Product.name == record.name)
            .order_by(Product.id)
            .limit(1)
        )
        product_id = result.scalar_one_or_none()
        return ProductId(product_id) if product_id is not None else None
