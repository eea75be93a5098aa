"""
Schemas for the two sync paths: bulk import results and incoming webhook events.
"""

from typing import Any, Dict, List, Optional, Union
from pydantic import Field, field_validator

from catalog_sync.schemas.base import BaseSchema
from catalog_sync.schemas.product import ProductChange


class SkippedRecord(BaseSchema):
    external_id: str
    reason: str


class BulkSyncResult(BaseSchema):
    shop: str
    products_synced: int = 0
    total_fetched: int = 0
    skipped: List[SkippedRecord] = Field(default_factory=list)


class ProductWebhookPayload(BaseSchema):
    """
    Shape check for products/create and products/update payloads.

    Shopify sends the numeric id and body_html; the GraphQL-style
    descriptionHtml is accepted as a fallback.
    """
    id: Union[int, str]
    title: str
    body_html: Optional[str] = None
    description_html: Optional[str] = Field(default=None, alias="descriptionHtml")

    @field_validator('id')
    @classmethod
    def id_not_blank(cls, v):
        if isinstance(v, str) and not v.strip():
            raise ValueError('id must not be empty')
        return v

    @field_validator('title')
    @classmethod
    def title_not_blank(cls, v):
        if not v.strip():
            raise ValueError('title must not be empty')
        return v

    @property
    def description(self) -> str:
        if self.body_html is not None:
            return self.body_html
        return self.description_html or ""


class IncomingEvent(BaseSchema):
    """A trusted webhook event. product is None for topics this service ignores."""
    topic: str
    shop: str
    product: Optional[ProductChange] = None

    @property
    def is_product_change(self) -> bool:
        return self.product is not None
