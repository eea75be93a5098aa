# catalog_sync/models/activity_log.py
from sqlalchemy import Column, Integer, String, DateTime, JSON
from sqlalchemy.sql import func
from sqlalchemy.dialects.postgresql import JSONB
from catalog_sync.database import Base

class ActivityLog(Base):
    """
    Records sync activity for auditing and monitoring.

    This includes:
    - Bulk sync runs (success and failure)
    - Records skipped during a bulk sync
    - Webhook events applied, ignored or rejected
    """
    __tablename__ = "activity_log"

    id = Column(Integer, primary_key=True)
    action = Column(String(50), nullable=False, index=True)  # 'bulk_sync', 'record_skipped', 'webhook'
    entity_type = Column(String(50), nullable=False, index=True)  # 'shop', 'product'
    entity_id = Column(String(255), nullable=False, index=True)
    shop = Column(String(255), nullable=True, index=True)

    # JSONB on postgres, plain JSON elsewhere (SQLite in tests)
    details = Column(JSON().with_variant(JSONB, "postgresql"), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)

    def __repr__(self):
        return f"<ActivityLog {self.action} {self.entity_type} {self.entity_id}>"
