# tests/conftest.py
import pytest
from unittest.mock import AsyncMock

from catalog_sync.core.config import Settings
from catalog_sync.database import build_engine, build_session_factory, create_tables
from catalog_sync.services.activity_logger import ActivityLogger
from catalog_sync.services.record_store import RecordStore

TEST_SHOP = "test-shop.myshopify.com"


@pytest.fixture(scope="session")
def settings():
    """Provide test settings"""
    return Settings(
        SHOPIFY_ADMIN_API_ACCESS_TOKEN="shpat_test_token",
        SHOPIFY_API_SECRET="test_secret",
        SHOPIFY_API_VERSION="2024-01",
        SHOPIFY_PRODUCTS_PER_PAGE=50,
    )


@pytest.fixture(scope="function")
async def test_engine(tmp_path):
    """File-backed SQLite database per test so each session gets its own connection."""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'catalog_sync_test.db'}")
    await create_tables(engine)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return build_session_factory(test_engine)


@pytest.fixture
def record_store(session_factory):
    return RecordStore(session_factory)


@pytest.fixture
def activity_logger():
    """An ActivityLogger stand-in that records calls"""
    return AsyncMock(spec=ActivityLogger)


@pytest.fixture
def shop():
    return TEST_SHOP
