"""Domain Types — value objects shared by the ingestor, sync and order commit.

Invariants:
    - ProductId is assigned by the catalog source, never generated locally
    - OrderGroupId comes from the store sequence (orden_grupos.id)
    - CatalogEntry / OrderRecord are frozen: rebuilt, never mutated
    - OrderRecord keeps the parsed strings as submitted (export uses them verbatim)

Design Decisions:
    - NewType over wrapper classes: zero runtime cost, full type-checker support
    - Frozen dataclasses for value objects, Pydantic only at the API boundary
"""

from dataclasses import dataclass, field
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

ProductId = NewType("ProductId", int)
OrderGroupId = NewType("OrderGroupId", int)


# ─── Catalog ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class CatalogRef:
    """Listing reference: name plus the URL of its detail document."""
    name: str
    url: str


@dataclass(frozen=True)
class CatalogEntry:
    """Catalog item after detail fetch."""
    id: ProductId
    name: str
    image_url: str


# ─── Orders ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class Buyer:
    name: str
    email: str
    address: str


@dataclass(frozen=True)
class OrderRecord:
    """One validated selection: client id, product name, requested quantity."""
    id: str
    name: str
    cantidad: str

    @property
    def quantity(self) -> int:
        return int(self.cantidad)


@dataclass(frozen=True)
class CommitResult:
    order_group_id: OrderGroupId
    export_path: str
    lines_committed: int
    skipped: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class SyncResult:
    inserted: int
    updated: int

    @property
    def total(self) -> int:
        return self.inserted + self.updated
