"""Store Routes — product and invoice listings read straight from the store."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.infrastructure.database import get_db
from storefront.schemas.store import (
    InvoiceLineResponse, InvoiceListView, ProductListView, ProductResponse,
)
from storefront.services.store_queries import StoreQueries

router = APIRouter(prefix="/api/v1", tags=["store"])


@router.get("/products", response_model=ProductListView)
async def list_products(db: AsyncSession = Depends(get_db)):
    products = await StoreQueries(db).list_products()
    return ProductListView(
        productos=[ProductResponse.model_validate(p) for p in products],
    )


@router.get("/invoices", response_model=InvoiceListView)
async def list_invoices(db: AsyncSession = Depends(get_db)):
    """Invoices with their order lines and products."""
    rows = await StoreQueries(db).list_invoices()
    return InvoiceListView(
        facturas=[InvoiceLineResponse(**row) for row in rows],
    )
