"""
Core module exports.
"""
from .enums import (
    WebhookTopic,
    ActivityAction
)

from .exceptions import (
    BaseServiceError,
    ValidationError,
    TransportError,
    ShopifyAPIError,
    StorageError
)
