# catalog_sync/main.py

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from catalog_sync.core.config import get_settings
from catalog_sync.core.logging_config import configure_logging
from catalog_sync.database import build_engine, build_session_factory, create_tables
from catalog_sync.routes import health, sync, webhooks
from catalog_sync.services.activity_logger import ActivityLogger
from catalog_sync.services.record_store import RecordStore
from catalog_sync.services.shopify.client import ShopifyGraphQLClient
from catalog_sync.services.sync_coordinator import SyncCoordinator

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    settings = get_settings()

    engine = build_engine()
    if engine.dialect.name == "sqlite":
        # Local development; postgres schemas are managed by alembic
        await create_tables(engine)

    session_factory = build_session_factory(engine)
    app.state.coordinator = SyncCoordinator.build(
        record_store=RecordStore(session_factory),
        listing=ShopifyGraphQLClient(settings),
        page_size=settings.SHOPIFY_PRODUCTS_PER_PAGE,
        activity_logger=ActivityLogger(session_factory),
    )
    logger.info(f"Catalog sync started ({settings.ENVIRONMENT})")

    yield

    await engine.dispose()
    logger.info("Database engine disposed")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application"""
    app = FastAPI(
        title="Catalog Sync API",
        description="Keeps a local Shopify product catalog in sync via bulk import and webhooks",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.include_router(health.router)
    app.include_router(sync.router)
    app.include_router(webhooks.router)
    return app


app = create_app()
