# catalog_sync/models/product.py
"""
Local copy of a Shopify product.

external_id is the merge key shared by the bulk import and the webhook path;
shop_id is fixed when the row is first created.
"""

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from ..database import Base
from .shop import utc_now


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    external_id = Column(String(100), unique=True, nullable=False, index=True)
    shop_id = Column(String(255), ForeignKey("shops.id"), nullable=False, index=True)

    title = Column(String(255), nullable=False)
    description_html = Column(Text, nullable=False, default="")

    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False)

    shop = relationship("Shop", back_populates="products")

    def __repr__(self):
        return f"<Product(external_id='{self.external_id}', shop='{self.shop_id}', title='{self.title}')>"
