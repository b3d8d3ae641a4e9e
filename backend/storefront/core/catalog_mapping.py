"""Catalog Mapping — pure transforms over catalog source documents.

Invariants:
    - parse_listing_page() never invents refs: entries without name or url are dropped
    - map_detail() falls back to the placeholder image when sprites.front_default
      is missing or null
    - batched() preserves input order and yields batches of at most `size`
    - filter_catalog() is case-insensitive substring match; empty query keeps all

Design Decisions:
    - Malformed detail documents raise ValueError; the ingestor treats that the
      same as a failed fetch (item dropped, run continues)
"""

from collections.abc import Iterator, Sequence

from storefront.core.domain_types import CatalogEntry, CatalogRef, ProductId

PLACEHOLDER_IMAGE_URL = "https://via.placeholder.com/150"


def parse_listing_page(payload: dict) -> tuple[list[CatalogRef], str | None]:
    """Extract (refs, next_url) from one listing page."""
    refs = [
        CatalogRef(name=item["name"], url=item["url"])
        for item in payload.get("results") or []
        if item.get("name") and item.get("url")
    ]
    return refs, payload.get("next") or None


def map_detail(
    ref: CatalogRef, payload: dict, placeholder: str = PLACEHOLDER_IMAGE_URL,
) -> CatalogEntry:
    """Map a detail document to CatalogEntry."""
    raw_id = payload.get("id")
    if raw_id is None:
        raise ValueError(f"detail for '{ref.name}' has no id")
    sprites = payload.get("sprites") or {}
    return CatalogEntry(
        id=ProductId(int(raw_id)),
        name=ref.name,
        image_url=sprites.get("front_default") or placeholder,
    )


def batched(items: Sequence, size: int) -> Iterator[list]:
    """Fixed-size consecutive batches; the last one may be shorter."""
    if size < 1:
        raise ValueError("batch size must be >= 1")
    for start in range(0, len(items), size):
        yield list(items[start:start + size])


def filter_catalog(entries: Sequence[CatalogEntry], query: str) -> list[CatalogEntry]:
    needle = (query or "").lower()
    return [e for e in entries if needle in e.name.lower()]
