"""Tests for order form parsing â pure validation, no IO."""

import pytest

from storefront.core.domain_types import OrderRecord
from storefront.core.errors import OrderValidationError
from storefront.core.parse_order import (
    normalize_selections, parse_buyer, parse_order_records, split_product_ref,
)


# -- parse_buyer ---------------------------------------------------------------

def test_buyer_fields_are_stripped():
    buyer = parse_buyer(" Ana ", "a@x.com ", " Calle 1")
    assert (buyer.name, buyer.email, buyer.address) == ("Ana", "a@x.com", "Calle 1")


@pytest.mark.parametrize("name,email,address,field", [
    ("", "a@x.com", "Calle 1", "cliente_nombre"),
    ("Ana", None, "Calle 1", "cliente_email"),
    ("Ana", "a@x.com", "   ", "cliente_direccion"),
])
def test_missing_buyer_field_raises(name, email, address, field):
    with pytest.raises(OrderValidationError) as exc:
        parse_buyer(name, email, address)
    assert exc.value.field == field
    assert exc.value.http_status == 400


# -- selections ----------------------------------------------------------------

def test_single_string_selection_becomes_list():
    assert normalize_selections("25,pikachu") == ["25,pikachu"]


def test_none_and_empty_selection_become_empty():
    assert normalize_selections(None) == []
    assert normalize_selections("") == []
    assert normalize_selections(["", ""]) == []


def test_split_product_ref():
    assert split_product_ref("25,pikachu") == ("25", "pikachu")
    assert split_product_ref("25") == ("25", "")
    assert split_product_ref(",pikachu") == ("", "pikachu")
    assert split_product_ref("122,mr,mime") == ("122", "mr,mime")


# -- parse_order_records -------------------------------------------------------

def test_records_built_from_refs_and_quantities():
    records = parse_order_records(
        ["25,pikachu", "1,bulbasaur"], {"25": "2", "1": 3},
    )
    assert records == [
        OrderRecord(id="25", name="pikachu", cantidad="2"),
        OrderRecord(id="1", name="bulbasaur", cantidad="3"),
    ]
    assert records[1].quantity == 3


def test_empty_selection_raises():
    with pytest.raises(OrderValidationError) as exc:
        parse_order_records([], {"25": "2"})
    assert exc.value.field == "selected_products"


def test_missing_quantity_raises():
    with pytest.raises(OrderValidationError, match="missing data"):
        parse_order_records(["25,pikachu"], {})


def test_missing_name_raises():
    with pytest.raises(OrderValidationError, match="missing data"):
        parse_order_records(["25"], {"25": "1"})


@pytest.mark.parametrize("qty", ["0", "-1", "abc", "1.5", "²", "٣"])
def test_non_positive_or_non_integer_quantity_raises(qty):
    with pytest.raises(OrderValidationError, match="positive integer"):
        parse_order_records(["25,pikachu"], {"25": qty})


def test_one_bad_record_rejects_the_whole_form():
    with pytest.raises(OrderValidationError):
        parse_order_records(["25,pikachu", "1,bulbasaur"], {"25": "2"})
