"""Catalog Sync — all-or-nothing upsert of ingested entries into productos.

Invariants:
    - One transaction for the whole entry list; any failure rolls back every row
    - Existing product (by id): only url is refreshed, name and cantidad untouched
    - New product: inserted with cantidad = 0
    - Session released on commit and on rollback

Design Decisions:
    - Flush after each entry: a bad row fails at its own position with the
      transaction still open, so the rollback covers every earlier upsert
"""

import logging
from collections.abc import Sequence

from storefront.core.domain_types import CatalogEntry, SyncResult
from storefront.infrastructure.database import DatabaseSessionManager
from storefront.models.product import Product
from storefront.services.catalog_ingestor import CatalogIngestor

logger = logging.getLogger(__name__)


class CatalogSync:
    """Persists catalog entries as products."""

    def __init__(self, db_manager: DatabaseSessionManager):
        self._db = db_manager

    async def sync_catalog(self, entries: Sequence[CatalogEntry]) -> SyncResult:
        inserted = updated = 0
        async with self._db.transaction() as db:
            for entry in entries:
                product = await db.get(Product, entry.id)
                if product is not None:
                    product.url = entry.image_url
                    updated += 1
                else:
                    db.add(Product(
                        id=entry.id, name=entry.name,
                        url=entry.image_url, cantidad=0,
                    ))
                    inserted += 1
                await db.flush()

        logger.info(
            f"Catalog sync committed: {inserted} inserted, {updated} updated",
            extra={"entries": len(entries)},
        )
        return SyncResult(inserted=inserted, updated=updated)

    async def refresh_from_source(
        self, ingestor: CatalogIngestor,
    ) -> tuple[int, SyncResult]:
        """Ingest the remote catalog, then sync it. Returns (fetched, result)."""
        entries = await ingestor.fetch_full_catalog()
        return len(entries), await self.sync_catalog(entries)
