"""Service Dependencies — FastAPI providers that wire services from settings + singletons.

Invariants:
    - Routes obtain services only through these providers (tests override them)
    - Configuration is passed explicitly at construction time
"""

from fastapi import Depends

from storefront.config import Settings, get_settings
from storefront.infrastructure.catalog_client import CatalogClient, get_catalog_client
from storefront.infrastructure.csv_exporter import CsvOrderExporter
from storefront.infrastructure.database import DatabaseSessionManager, get_db_manager
from storefront.services.catalog_ingestor import CatalogIngestor
from storefront.services.catalog_sync import CatalogSync
from storefront.services.order_commit import OrderCommitCoordinator


def get_ingestor(
    settings: Settings = Depends(get_settings),
    client: CatalogClient = Depends(get_catalog_client),
) -> CatalogIngestor:
    return CatalogIngestor(
        client,
        first_page_url=settings.catalog_first_page_url,
        concurrency=settings.catalog_detail_concurrency,
        placeholder_image=settings.catalog_placeholder_image,
    )


def get_catalog_sync(
    db_manager: DatabaseSessionManager = Depends(get_db_manager),
) -> CatalogSync:
    return CatalogSync(db_manager)


def get_order_coordinator(
    settings: Settings = Depends(get_settings),
    db_manager: DatabaseSessionManager = Depends(get_db_manager),
) -> OrderCommitCoordinator:
    return OrderCommitCoordinator(
        db_manager, CsvOrderExporter(settings.order_export_path),
    )
