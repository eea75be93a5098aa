class BaseServiceError(Exception):
    """Base exception for all service-related errors."""
    pass

class ValidationError(BaseServiceError):
    """Raised when a record or event is missing a required field."""
    pass

class TransportError(BaseServiceError):
    """Raised when a request to the remote store fails."""
    pass

class ShopifyAPIError(TransportError):
    """Raised when Shopify API calls fail."""
    pass

class StorageError(BaseServiceError):
    """Raised when the persistence layer rejects or fails a write."""
    pass
