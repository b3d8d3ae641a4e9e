"""Catalog Sync — upsert semantics and all-or-nothing rollback."""

import pytest
from sqlalchemy import select

from storefront.core.domain_types import CatalogEntry
from storefront.core.errors import PersistenceError
from storefront.models.product import Product
from storefront.services.catalog_ingestor import CatalogIngestor
from storefront.services.catalog_sync import CatalogSync

from tests.fakes import FakeCatalogSource, make_details, make_pages, page_url


async def _products(session_factory) -> dict[int, Product]:
    async with session_factory() as s:
        result = await s.execute(select(Product))
        return {p.id: p for p in result.scalars().all()}


async def test_inserts_new_products_with_zero_stock(test_db_manager, test_session_factory):
    result = await CatalogSync(test_db_manager).sync_catalog([
        CatalogEntry(1, "bulbasaur", "https://img/1.png"),
        CatalogEntry(4, "charmander", "https://img/4.png"),
    ])

    assert (result.inserted, result.updated) == (2, 0)
    products = await _products(test_session_factory)
    assert products[4].name == "charmander"
    assert products[4].url == "https://img/4.png"
    assert products[1].cantidad == 0


async def test_existing_product_only_gets_new_url(
    test_db_manager, test_session_factory, seed_products,
):
    await seed_products((25, "pikachu", 10))

    result = await CatalogSync(test_db_manager).sync_catalog([
        CatalogEntry(25, "renamed", "https://img/new.png"),
    ])

    assert (result.inserted, result.updated) == (0, 1)
    product = (await _products(test_session_factory))[25]
    assert product.url == "https://img/new.png"
    assert product.name == "pikachu"
    assert product.cantidad == 10


async def test_failure_on_last_upsert_leaves_store_unchanged(
    test_db_manager, test_session_factory, seed_products,
):
    await seed_products((1, "bulbasaur", 5), (2, "ivysaur", 7))
    before = {
        pid: (p.name, p.url, p.cantidad)
        for pid, p in (await _products(test_session_factory)).items()
    }

    entries = [
        CatalogEntry(1, "bulbasaur", "https://img/changed-1.png"),
        CatalogEntry(2, "ivysaur", "https://img/changed-2.png"),
        CatalogEntry(3, None, "https://img/3.png"),  # NOT NULL violation
    ]
    with pytest.raises(PersistenceError):
        await CatalogSync(test_db_manager).sync_catalog(entries)

    after = {
        pid: (p.name, p.url, p.cantidad)
        for pid, p in (await _products(test_session_factory)).items()
    }
    assert after == before


async def test_empty_entry_list_is_a_noop(test_db_manager, test_session_factory):
    result = await CatalogSync(test_db_manager).sync_catalog([])
    assert result.total == 0
    assert await _products(test_session_factory) == {}


async def test_refresh_from_source_ingests_then_syncs(
    test_db_manager, test_session_factory,
):
    names = ["bulbasaur", "ivysaur", "venusaur"]
    source = FakeCatalogSource(make_pages([names]), make_details(names))
    ingestor = CatalogIngestor(source, page_url(1))

    fetched, result = await CatalogSync(test_db_manager).refresh_from_source(ingestor)

    assert fetched == 3
    assert result.inserted == 3
    assert sorted(await _products(test_session_factory)) == [1, 2, 3]
