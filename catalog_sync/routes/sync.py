# catalog_sync/routes/sync.py
"""
Full Shopify catalog import for a shop, and read access to the stored result.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from catalog_sync.core.exceptions import TransportError
from catalog_sync.dependencies import get_coordinator
from catalog_sync.schemas.product import ProductRead
from catalog_sync.schemas.sync import BulkSyncResult
from catalog_sync.services.sync_coordinator import SyncCoordinator

router = APIRouter(prefix="/api", tags=["sync"])

logger = logging.getLogger(__name__)


@router.post("/sync/{shop}", response_model=BulkSyncResult)
async def sync_shop(
    shop: str,
    coordinator: SyncCoordinator = Depends(get_coordinator),
):
    """Download every product for the shop and upsert it locally"""
    logger.info(f"Initiating Shopify sync for {shop}")
    try:
        return await coordinator.sync_all(shop)
    except TransportError as e:
        raise HTTPException(status_code=502, detail=f"Shopify sync failed: {str(e)}")


@router.get("/shops/{shop}/products", response_model=List[ProductRead])
async def list_shop_products(
    shop: str,
    coordinator: SyncCoordinator = Depends(get_coordinator),
):
    """Products currently stored for the shop"""
    products = await coordinator.record_store.list_for_shop(shop)
    return [ProductRead.from_orm_model(p) for p in products]
