from .base import BaseSchema, TimestampedSchema
from .product import RemoteProduct, ProductPage, ProductChange, ProductRead
from .sync import SkippedRecord, BulkSyncResult, ProductWebhookPayload, IncomingEvent
