"""Catalog Routes — live catalog picker and catalog-to-store sync.

Invariants:
    - GET /catalog always answers 200, possibly with a partial or empty list
      (ingestion never raises for upstream failures)
    - POST /catalog/sync is all-or-nothing: 200 with counts, or an error envelope
      and no product changes
"""

from fastapi import APIRouter, Depends, Query

from storefront.api.dependencies import get_catalog_sync, get_ingestor
from storefront.core.catalog_mapping import filter_catalog
from storefront.schemas.catalog import CatalogEntryResponse, CatalogView, SyncResponse
from storefront.services.catalog_ingestor import CatalogIngestor
from storefront.services.catalog_sync import CatalogSync

router = APIRouter(prefix="/api/v1/catalog", tags=["catalog"])


@router.get("", response_model=CatalogView)
async def get_catalog(
    search: str = Query("", max_length=100),
    ingestor: CatalogIngestor = Depends(get_ingestor),
):
    """Fetch the remote catalog and filter it by name."""
    entries = await ingestor.fetch_full_catalog()
    return CatalogView(
        pokemons=[
            CatalogEntryResponse.model_validate(e)
            for e in filter_catalog(entries, search)
        ],
        searchQuery=search,
    )


@router.post("/sync", response_model=SyncResponse)
async def sync_catalog(
    ingestor: CatalogIngestor = Depends(get_ingestor),
    catalog_sync: CatalogSync = Depends(get_catalog_sync),
):
    """Refresh productos from the remote catalog in one transaction."""
    fetched, result = await catalog_sync.refresh_from_source(ingestor)
    return SyncResponse(
        fetched=fetched, inserted=result.inserted, updated=result.updated,
    )
