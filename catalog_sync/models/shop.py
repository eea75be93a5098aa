# catalog_sync/models/shop.py
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship

from ..database import Base


def utc_now():
    return datetime.now(timezone.utc)


class Shop(Base):
    """
    A Shopify store that owns products.

    Rows are created implicitly by the first product write for the shop and
    are never deleted; only last_activity_at changes afterwards.
    """
    __tablename__ = "shops"

    id = Column(String(255), primary_key=True)  # Shop domain, e.g. example.myshopify.com

    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    last_activity_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)

    products = relationship("Product", back_populates="shop")

    def __repr__(self):
        return f"<Shop {self.id}>"
