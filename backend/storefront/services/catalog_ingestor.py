"""Catalog Ingestor — paged listing walk followed by batched, bounded detail fetches.

Invariants:
    - fetch_full_catalog() never raises for upstream problems: it returns the
      best-effort partial result
    - A failed page stops pagination; refs from earlier pages are kept
    - Detail fetches run in fixed batches of `concurrency`; batch N+1 starts only
      after every fetch of batch N has resolved (batch barrier)
    - At most `concurrency` detail requests are in flight at any moment
    - A failed or malformed detail drops only that item
    - Result order: batch order, then listing order within a batch

Design Decisions:
    - Batch barrier kept over a refilling pool: a batch waits for its slowest member,
      which bounds upstream load in bursts the catalog API tolerates
    - Semaphore on top of the batching makes the in-flight cap explicit even if
      batch size and cap ever diverge
    - Pages already visited are not fetched twice (guards against a `next` loop)
"""

import asyncio
import logging

from storefront.core.catalog_mapping import (
    PLACEHOLDER_IMAGE_URL, batched, map_detail, parse_listing_page,
)
from storefront.core.domain_types import CatalogEntry, CatalogRef
from storefront.core.errors import UpstreamFetchError
from storefront.core.repository_protocols import CatalogSource

logger = logging.getLogger(__name__)

DEFAULT_CONCURRENCY = 10

# Malformed documents surface as lookup/type/value errors from the mappers
_RECOVERABLE = (
    UpstreamFetchError, KeyError, TypeError, ValueError, AttributeError,
)


class CatalogIngestor:
    """Builds the in-memory catalog from the remote source."""

    def __init__(
        self,
        source: CatalogSource,
        first_page_url: str,
        concurrency: int = DEFAULT_CONCURRENCY,
        placeholder_image: str = PLACEHOLDER_IMAGE_URL,
    ):
        if concurrency < 1:
            raise ValueError("concurrency must be >= 1")
        self.source = source
        self.first_page_url = first_page_url
        self.concurrency = concurrency
        self.placeholder_image = placeholder_image

    async def fetch_full_catalog(self) -> list[CatalogEntry]:
        refs = await self.collect_refs()
        entries = await self.fetch_details(refs)
        logger.info(
            f"Catalog ingestion finished: {len(entries)}/{len(refs)} items",
            extra={"entries": len(entries)},
        )
        return entries

    async def collect_refs(self) -> list[CatalogRef]:
        """Follow `next` links until exhausted or a page fails."""
        refs: list[CatalogRef] = []
        visited: set[str] = set()
        url: str | None = self.first_page_url
        while url and url not in visited:
            visited.add(url)
            try:
                payload = await self.source.fetch_page(url)
                page_refs, url = parse_listing_page(payload)
            except _RECOVERABLE as e:
                logger.error(
                    f"Catalog page fetch failed, keeping {len(refs)} refs: {e}",
                    extra={"url": url},
                )
                break
            refs.extend(page_refs)
        return refs

    async def fetch_details(self, refs: list[CatalogRef]) -> list[CatalogEntry]:
        """Fetch details batch by batch; each batch is a barrier."""
        semaphore = asyncio.Semaphore(self.concurrency)
        entries: list[CatalogEntry] = []
        for batch_number, batch in enumerate(batched(refs, self.concurrency), 1):
            results = await asyncio.gather(
                *(self._fetch_one(ref, semaphore) for ref in batch),
            )
            survivors = [entry for entry in results if entry is not None]
            entries.extend(survivors)
            logger.debug(
                f"Detail batch done: {len(survivors)}/{len(batch)}",
                extra={"batch": batch_number},
            )
        return entries

    async def _fetch_one(
        self, ref: CatalogRef, semaphore: asyncio.Semaphore,
    ) -> CatalogEntry | None:
        async with semaphore:
            try:
                payload = await self.source.fetch_detail(ref.url)
                return map_detail(ref, payload, self.placeholder_image)
            except _RECOVERABLE as e:
                logger.warning(
                    f"Dropping '{ref.name}': {e}",
                    extra={"product_name": ref.name, "url": ref.url},
                )
                return None
