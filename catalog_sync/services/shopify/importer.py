# catalog_sync/services/shopify/importer.py
"""
Shopify Importer Service - full re-import of a shop's catalog into the local store.
"""

import logging
from datetime import datetime

from catalog_sync.core.exceptions import StorageError, ValidationError
from catalog_sync.schemas.product import RemoteProduct
from catalog_sync.schemas.sync import BulkSyncResult, SkippedRecord
from catalog_sync.services.record_store import RecordStore
from catalog_sync.services.shopify.pager import ProductPageWalker
from catalog_sync.services.shopify.utils import normalize_external_id

logger = logging.getLogger(__name__)


class ShopifyImporter:
    """
    Bulk import of every Shopify product for one shop.

    The whole catalog is walked into memory first, then written record by
    record through the record store. A record that fails validation or
    storage is skipped and reported; a transport failure aborts the run.
    Writes already made are kept, a later full import fills any gap.
    """

    def __init__(self, walker: ProductPageWalker, record_store: RecordStore):
        self.walker = walker
        self.record_store = record_store

    async def run(self, shop: str) -> BulkSyncResult:
        """
        Import all products for `shop`.

        Returns:
            BulkSyncResult with the number of products written and any skips

        Raises:
            TransportError: a page request failed
        """
        logger.info(f"Starting Shopify products import for {shop}")
        start_time = datetime.now()

        shopify_products = await self.walker.fetch_all(shop)
        logger.info(f"Retrieved {len(shopify_products)} products from Shopify for {shop}")

        result = BulkSyncResult(shop=shop, total_fetched=len(shopify_products))

        for i, product_data in enumerate(shopify_products, 1):
            # Log progress every 50 products
            if i % 50 == 0:
                logger.info(f"Processing product {i}/{len(shopify_products)}")

            try:
                await self._process_single_product(shop, product_data)
                result.products_synced += 1
            except (ValidationError, StorageError) as e:
                logger.warning(f"Skipping product {product_data.id or 'unknown'}: {str(e)}")
                result.skipped.append(
                    SkippedRecord(external_id=product_data.id or "", reason=str(e))
                )

        duration = datetime.now() - start_time
        logger.info(
            f"Shopify import for {shop} completed in {duration}: "
            f"{result.products_synced} synced, {len(result.skipped)} skipped"
        )
        return result

    async def _process_single_product(self, shop: str, product_data: RemoteProduct):
        external_id = normalize_external_id(product_data.id or None)
        return await self.record_store.upsert(
            shop_id=shop,
            external_id=external_id,
            title=product_data.title,
            description_html=product_data.description_html,
        )
