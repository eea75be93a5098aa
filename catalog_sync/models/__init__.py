from .shop import Shop
from .product import Product
from .activity_log import ActivityLog

# This ensures all models are registered with SQLAlchemy
__all__ = [
    'Shop',
    'Product',
    'ActivityLog',
]
