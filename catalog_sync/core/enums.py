"""
Shared enums and constants used across the application.
"""

from enum import Enum


class WebhookTopic(str, Enum):
    """Shopify webhook topics that change a product record"""
    PRODUCTS_CREATE = "products/create"
    PRODUCTS_UPDATE = "products/update"

    @classmethod
    def normalize(cls, topic: str) -> str:
        # Shopify sends "products/update" in headers, "PRODUCTS_UPDATE" in GraphQL subscriptions
        return (topic or "").strip().lower().replace("_", "/")

    @classmethod
    def from_raw(cls, topic: str):
        """Return the matching topic, or None when the topic is not product-related."""
        try:
            return cls(cls.normalize(topic))
        except ValueError:
            return None


class ActivityAction(str, Enum):
    BULK_SYNC = "bulk_sync"
    RECORD_SKIPPED = "record_skipped"
    WEBHOOK = "webhook"
