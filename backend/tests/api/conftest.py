"""API test fixtures — FastAPI test client wired to the in-memory store and a fake catalog.

Invariants:
    - get_db / get_db_manager overridden to use the test engine
    - get_catalog_client overridden with FakeCatalogSource (no network)
    - get_settings overridden so exports land in tmp_path
    - db_manager singleton patched for the readiness probe, restored afterwards

Design Decisions:
    - ASGITransport does not run the lifespan: nothing real is initialized
"""

import pytest
from httpx import ASGITransport, AsyncClient

import storefront.infrastructure.database as db_module
from storefront.config import Settings, get_settings
from storefront.infrastructure.catalog_client import get_catalog_client
from storefront.infrastructure.database import get_db, get_db_manager
from storefront.main import app

from tests.fakes import FakeCatalogSource, make_details, make_pages, page_url

CATALOG_NAMES = ["bulbasaur", "ivysaur", "pikachu", "raichu"]


@pytest.fixture
def export_path(tmp_path):
    return tmp_path / "exports" / "ordenes.csv"


@pytest.fixture
def catalog_source():
    return FakeCatalogSource(
        make_pages([CATALOG_NAMES[:2], CATALOG_NAMES[2:]]),
        make_details(CATALOG_NAMES),
    )


@pytest.fixture
async def client(test_db_manager, test_session_factory, catalog_source, export_path):
    """FastAPI test client with store, catalog and settings overridden."""
    settings = Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        catalog_first_page_url=page_url(1),
        order_export_path=str(export_path),
    )

    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_db_manager] = lambda: test_db_manager
    app.dependency_overrides[get_catalog_client] = lambda: catalog_source
    app.dependency_overrides[get_settings] = lambda: settings

    original_manager = db_module.db_manager
    db_module.db_manager = test_db_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
