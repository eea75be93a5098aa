"""
Schemas for products as they arrive from Shopify and as they are stored locally.
"""

from typing import List, Optional
from pydantic import Field, field_validator

from catalog_sync.schemas.base import BaseSchema, TimestampedSchema


class RemoteProduct(BaseSchema):
    """
    One product node from the Shopify products connection.

    Fields are coerced rather than validated here: an empty title must reach
    the record store so the importer can skip that single record.
    """
    id: str = ""
    title: str = ""
    description_html: str = Field(default="", alias="descriptionHtml")

    @field_validator('id', 'title', 'description_html', mode='before')
    @classmethod
    def none_to_empty(cls, v):
        if v is None:
            return ""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class ProductPage(BaseSchema):
    """One page of the products connection plus its cursor state."""
    records: List[RemoteProduct] = Field(default_factory=list)
    has_next_page: bool = False
    end_cursor: Optional[str] = None


class ProductChange(BaseSchema):
    """Product fields carried by a validated webhook event."""
    external_id: str
    title: str
    description_html: str = ""


class ProductRead(TimestampedSchema):
    id: int
    external_id: str
    shop_id: str
    title: str
    description_html: str
