# catalog_sync/services/activity_logger.py
import logging
from datetime import datetime, timezone
from typing import Dict, Any, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from catalog_sync.core.enums import ActivityAction
from catalog_sync.models.activity_log import ActivityLog

logger = logging.getLogger(__name__)

class ActivityLogger:
    """
    Structured record of sync activity.

    Every activity is written to the log stream and, when a session factory
    is supplied, to the activity_log table. The sync coordinator receives an
    instance of this class; nothing else writes activities.
    """

    def __init__(self, session_factory: Optional[async_sessionmaker] = None):
        self.session_factory = session_factory

    async def log_activity(
        self,
        action: str,
        entity_type: str,
        entity_id: str,
        shop: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> Optional[ActivityLog]:
        """
        Log an activity in the system.

        Args:
            action: The action performed (bulk_sync, record_skipped, webhook)
            entity_type: The type of entity affected (shop, product)
            entity_id: The ID of the affected entity
            shop: The shop domain the activity belongs to
            details: Optional additional details as a dictionary

        Returns:
            The created ActivityLog instance, or None if it was not persisted
        """
        if isinstance(action, ActivityAction):
            action = action.value

        logger.info(
            f"Activity: {action} {entity_type} {entity_id} "
            f"(shop: {shop or 'N/A'}) {details or {}}"
        )

        if self.session_factory is None:
            return None

        try:
            log_entry = ActivityLog(
                action=action,
                entity_type=entity_type,
                entity_id=str(entity_id),
                shop=shop,
                details=details,
                created_at=datetime.now(timezone.utc)
            )
            async with self.session_factory() as session:
                async with session.begin():
                    session.add(log_entry)
            return log_entry

        except SQLAlchemyError as e:
            # Don't raise, as logging should not interrupt the main flow
            logger.error(f"Error logging activity: {str(e)}")
            return None

    async def log_sync(
        self,
        shop: str,
        status: str,
        details: Dict[str, Any]
    ) -> Optional[ActivityLog]:
        """Log a bulk sync run for a shop."""
        return await self.log_activity(
            action=ActivityAction.BULK_SYNC,
            entity_type="shop",
            entity_id=shop,
            shop=shop,
            details={"status": status, **details}
        )

    async def log_webhook(
        self,
        shop: str,
        topic: str,
        status: str,
        external_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> Optional[ActivityLog]:
        """Log the outcome of one webhook event."""
        return await self.log_activity(
            action=ActivityAction.WEBHOOK,
            entity_type="product" if external_id else "shop",
            entity_id=external_id or shop,
            shop=shop,
            details={"topic": topic, "status": status, **(details or {})}
        )
