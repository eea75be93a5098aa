# catalog_sync/services/sync_coordinator.py
"""
Entry point for both sync paths.

The coordinator wires the bulk importer and the webhook processor to the
same RecordStore and reports what happened through the injected
ActivityLogger. It keeps no state of its own.

Ordering between the paths is last-write-wins per product: a bulk page
written after a fresher webhook overwrites it. A later webhook or full
import corrects the record.
"""

import logging
from typing import Any, Dict, Optional

from catalog_sync.core.enums import ActivityAction
from catalog_sync.core.exceptions import StorageError, TransportError, ValidationError
from catalog_sync.schemas.sync import BulkSyncResult, IncomingEvent
from catalog_sync.services.activity_logger import ActivityLogger
from catalog_sync.services.record_store import RecordStore
from catalog_sync.services.shopify.importer import ShopifyImporter
from catalog_sync.services.shopify.pager import ProductListing, ProductPageWalker
from catalog_sync.services.webhook_processor import WebhookProcessor

logger = logging.getLogger(__name__)


class SyncCoordinator:

    def __init__(
        self,
        importer: ShopifyImporter,
        webhook_processor: WebhookProcessor,
        activity_logger: Optional[ActivityLogger] = None,
    ):
        if importer.record_store is not webhook_processor.record_store:
            raise ValueError("Importer and webhook processor must share one RecordStore")
        self.importer = importer
        self.webhook_processor = webhook_processor
        self.activity_logger = activity_logger or ActivityLogger()

    @classmethod
    def build(
        cls,
        record_store: RecordStore,
        listing: ProductListing,
        page_size: int = 50,
        activity_logger: Optional[ActivityLogger] = None,
    ) -> "SyncCoordinator":
        """Wire both paths onto one record store."""
        walker = ProductPageWalker(listing, page_size=page_size)
        return cls(
            importer=ShopifyImporter(walker, record_store),
            webhook_processor=WebhookProcessor(record_store),
            activity_logger=activity_logger,
        )

    @property
    def record_store(self) -> RecordStore:
        return self.importer.record_store

    async def sync_all(self, shop: str) -> BulkSyncResult:
        """
        Run a full import for `shop`.

        Raises:
            TransportError: the catalog walk failed; the run is aborted
        """
        try:
            result = await self.importer.run(shop)
        except TransportError as e:
            logger.error(f"Bulk sync for {shop} aborted: {str(e)}")
            await self.activity_logger.log_sync(shop, "error", {"error": str(e)})
            raise

        for skipped in result.skipped:
            await self.activity_logger.log_activity(
                action=ActivityAction.RECORD_SKIPPED,
                entity_type="product",
                entity_id=skipped.external_id or "unknown",
                shop=shop,
                details={"reason": skipped.reason},
            )

        await self.activity_logger.log_sync(shop, "success", {
            "products_synced": result.products_synced,
            "total_fetched": result.total_fetched,
            "skipped": len(result.skipped),
        })
        return result

    async def ingest_event(self, topic: str, shop: str, payload: Optional[Dict[str, Any]]) -> IncomingEvent:
        """
        Validate and apply one trusted webhook.

        Raises:
            ValidationError: the payload is unusable; nothing was written
            StorageError: the write failed; nothing was written
        """
        try:
            event = self.webhook_processor.parse(topic, shop, payload)
        except ValidationError as e:
            logger.warning(f"Rejected webhook {topic} for {shop}: {str(e)}")
            await self.activity_logger.log_webhook(shop or "unknown", topic or "", "rejected",
                                                   details={"error": str(e)})
            raise

        external_id = event.product.external_id if event.product else None
        try:
            await self.webhook_processor.apply(event)
        except (ValidationError, StorageError) as e:
            logger.error(f"Webhook {event.topic} for {shop} failed: {str(e)}")
            await self.activity_logger.log_webhook(shop, event.topic, "failed", external_id,
                                                   details={"error": str(e)})
            raise

        status = "applied" if event.is_product_change else "ignored"
        await self.activity_logger.log_webhook(event.shop or "unknown", event.topic, status, external_id)
        return event
