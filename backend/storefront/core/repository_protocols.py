"""Boundary Protocols — contracts between services and infrastructure.

Invariants:
    - Services depend on these Protocols, never on httpx or the csv module directly
    - Implementations provided by infrastructure/ via constructor injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
"""

from collections.abc import Sequence
from typing import Protocol

from storefront.core.domain_types import OrderRecord


class CatalogSource(Protocol):
    """Remote catalog API. Both calls raise UpstreamFetchError on failure."""
    async def fetch_page(self, url: str) -> dict: ...
    async def fetch_detail(self, url: str) -> dict: ...


class OrderExporter(Protocol):
    """Flat-file sink for committed order records. Raises ExportError on failure.

    stage() writes somewhere invisible and returns a handle; publish(handle)
    makes it the export at `path`; discard(handle) drops it.
    """
    path: str

    def stage(self, records: Sequence[OrderRecord]) -> str: ...
    def publish(self, staged_path: str) -> str: ...
    def discard(self, staged_path: str) -> None: ...
