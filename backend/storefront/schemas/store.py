"""Store Schemas — product and invoice listing view-models."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict


class ProductResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    url: str
    cantidad: int


class ProductListView(BaseModel):
    productos: list[ProductResponse]


class InvoiceLineResponse(BaseModel):
    factura_id: int
    orden_id: int
    fecha: datetime
    total: Decimal
    cliente_nombre: str
    cliente_email: str
    cliente_direccion: str
    producto_nombre: str
    producto_url: str
    producto_cantidad: int


class InvoiceListView(BaseModel):
    facturas: list[InvoiceLineResponse]
