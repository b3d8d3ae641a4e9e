"""Order Parsing — pure validation of the order form before any store access.

Invariants:
    - Raises OrderValidationError on the first problem found; never touches IO
    - Form-level checks (selections, buyer fields) run before per-record checks
    - Product refs are "id,name"; the quantity is looked up by the parsed id
    - Records keep the submitted strings (export writes them as received)

Design Decisions:
    - A single selection string is accepted as a one-item list (HTML forms send a
      scalar when only one checkbox is ticked)
    - Quantities must be positive integers: a zero or negative line would silently
      restock inventory on decrement
"""

from collections.abc import Mapping, Sequence

from storefront.core.domain_types import Buyer, OrderRecord
from storefront.core.errors import OrderValidationError


def parse_buyer(name: str | None, email: str | None, address: str | None) -> Buyer:
    """Build Buyer, rejecting any missing or blank field."""
    for field_name, value in (
        ("cliente_nombre", name),
        ("cliente_email", email),
        ("cliente_direccion", address),
    ):
        if not value or not value.strip():
            raise OrderValidationError(
                "Please fill in every form field and select at least one product.",
                field_name,
            )
    return Buyer(name=name.strip(), email=email.strip(), address=address.strip())


def normalize_selections(selected: Sequence[str] | str | None) -> list[str]:
    if selected is None:
        return []
    if isinstance(selected, str):
        return [selected] if selected else []
    return [s for s in selected if s]


def split_product_ref(ref: str) -> tuple[str, str]:
    """Split "id,name" on the first comma. Missing parts come back empty."""
    parts = [p.strip() for p in ref.split(",", 1)]
    product_id = parts[0] if parts else ""
    name = parts[1] if len(parts) > 1 else ""
    return product_id, name


def _is_positive_int(value: str) -> bool:
    # isdigit() alone accepts non-ASCII digits that int() rejects
    return value.isascii() and value.isdigit() and int(value) > 0


def parse_order_records(
    selected: Sequence[str] | str | None,
    quantities: Mapping[str, str | int | None],
) -> list[OrderRecord]:
    """Turn raw selections + quantity map into validated OrderRecords."""
    refs = normalize_selections(selected)
    if not refs:
        raise OrderValidationError(
            "Please fill in every form field and select at least one product.",
            "selected_products",
        )

    records = []
    for ref in refs:
        product_id, name = split_product_ref(ref)
        raw_qty = quantities.get(product_id) if product_id else None
        cantidad = "" if raw_qty is None else str(raw_qty).strip()
        records.append(OrderRecord(id=product_id, name=name, cantidad=cantidad))

    for record in records:
        if not record.id or not record.name or not record.cantidad:
            raise OrderValidationError(
                "Some selected products are missing data.", "selected_products",
            )
        if not _is_positive_int(record.cantidad):
            raise OrderValidationError(
                f"Quantity for '{record.name}' must be a positive integer.",
                f"quantities.{record.id}",
            )
    return records
