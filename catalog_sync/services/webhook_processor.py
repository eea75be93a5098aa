# catalog_sync/services/webhook_processor.py
"""
Applies trusted Shopify product webhooks to the local store.

Signature checking happens before events reach this module. Here a raw
(topic, shop, payload) triple is turned into a typed IncomingEvent, or
rejected with ValidationError, and a product event becomes exactly one
RecordStore.upsert. Topics other than product create/update are
acknowledged without touching the store so Shopify stops redelivering them.
"""

import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError as PydanticValidationError

from catalog_sync.core.enums import WebhookTopic
from catalog_sync.core.exceptions import ValidationError
from catalog_sync.schemas.product import ProductChange
from catalog_sync.schemas.sync import IncomingEvent, ProductWebhookPayload
from catalog_sync.services.record_store import RecordStore
from catalog_sync.services.shopify.utils import normalize_external_id

logger = logging.getLogger(__name__)


def _describe_errors(error: PydanticValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in err['loc']) or 'payload'}: {err['msg']}"
        for err in error.errors()
    )


class WebhookProcessor:

    def __init__(self, record_store: RecordStore):
        self.record_store = record_store

    def parse(self, topic: str, shop: str, payload: Optional[Dict[str, Any]]) -> IncomingEvent:
        """
        Build a typed event from a trusted webhook.

        Raises:
            ValidationError: a product topic arrives without a shop, or with
                a payload lacking a usable id or title
        """
        webhook_topic = WebhookTopic.from_raw(topic)
        if webhook_topic is None:
            return IncomingEvent(topic=topic or "", shop=shop or "")

        if not shop or not shop.strip():
            raise ValidationError("Webhook has no shop domain")

        if not isinstance(payload, dict):
            raise ValidationError(f"Webhook {webhook_topic.value} payload must be an object")

        try:
            product_payload = ProductWebhookPayload.model_validate(payload)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid {webhook_topic.value} payload: {_describe_errors(e)}") from e

        return IncomingEvent(
            topic=webhook_topic.value,
            shop=shop,
            product=ProductChange(
                external_id=normalize_external_id(product_payload.id),
                title=product_payload.title,
                description_html=product_payload.description,
            ),
        )

    async def apply(self, event: IncomingEvent) -> None:
        """Write the event's product; unrecognized topics are a no-op."""
        if not event.is_product_change:
            logger.info(f"Unhandled webhook topic {event.topic} for {event.shop}")
            return

        product = event.product
        logger.info(f"Processing {event.topic} for {event.shop}: ID {product.external_id}, Title {product.title}")
        await self.record_store.upsert(
            shop_id=event.shop,
            external_id=product.external_id,
            title=product.title,
            description_html=product.description_html,
        )
        logger.info(f"Product ID {product.external_id} updated/created from webhook")
