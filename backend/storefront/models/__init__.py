"""ORM Models — SQLAlchemy declarative models for the storefront tables.

Invariants:
    - All models inherit from Base (db/base.py)
    - Table names follow the existing store schema: productos, ordenes, facturas

Design Decisions:
    - One file per entity
    - All models imported here so Base.metadata (alembic, test create_all) sees
      every table
"""

from storefront.models.product import Product  # noqa: F401
from storefront.models.order_group import OrderGroup  # noqa: F401
from storefront.models.order_line import OrderLine  # noqa: F401
from storefront.models.invoice import Invoice  # noqa: F401
