"""Root conftest — shared test configuration and async DB fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - Tests never reach the real catalog API or a real PostgreSQL

Design Decisions:
    - SQLite in-memory via aiosqlite: fast, no external dependency; PostgreSQL
      specifics (sequences, isolation) are not exercised here
    - Seeding and assertions use short-lived sessions from test_session_factory:
      the in-memory engine shares one connection, so sessions must not overlap
"""

import os

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("LOG_FORMAT", "text")

from storefront.db.base import Base  # noqa: E402
import storefront.models  # noqa: E402,F401
from storefront.infrastructure.database import DatabaseSessionManager  # noqa: E402
from storefront.models.product import Product  # noqa: E402


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db_manager(test_engine, test_session_factory):
    """DatabaseSessionManager bound to the in-memory test engine."""
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = test_session_factory
    return manager


@pytest.fixture
def seed_products(test_session_factory):
    """Insert products: await seed_products((25, "pikachu", 10), ...)."""

    async def _seed(*rows):
        async with test_session_factory() as session:
            for product_id, name, cantidad in rows:
                session.add(Product(
                    id=product_id, name=name,
                    url=f"https://img.test/{product_id}.png", cantidad=cantidad,
                ))
            await session.commit()

    return _seed
