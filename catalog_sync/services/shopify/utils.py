# catalog_sync/services/shopify/utils.py
"""Helpers shared by the Shopify import and webhook paths."""

from typing import Any

from catalog_sync.core.exceptions import ValidationError

GID_PREFIX = "gid://shopify/"


def normalize_external_id(value: Any) -> str:
    """
    Reduce a Shopify product id to the form used as the local merge key.

    GraphQL returns "gid://shopify/Product/123" while webhooks carry 123;
    both become "123". Other ids are returned stripped.
    """
    if value is None or isinstance(value, bool):
        raise ValidationError("Product id is missing")

    external_id = str(value).strip()
    if external_id.startswith(GID_PREFIX):
        external_id = external_id.split("/")[-1]

    if not external_id:
        raise ValidationError("Product id is missing")
    return external_id
