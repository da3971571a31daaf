import logging
from typing import Any, Dict, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from bandwidth_billing.models.activity_log import ActivityLog

logger = logging.getLogger(__name__)


class ActivityService:
    """Audit trail writer. A failed write is logged and never undoes the operation it describes."""

    def log(
        self,
        db: Session,
        tenant_id: str,
        action: str,
        entity_type: str,
        entity_id: int,
        details: Dict[str, Any],
        user_identifier: Optional[str] = None
    ) -> Optional[ActivityLog]:
        entry = ActivityLog(
            tenant_id=tenant_id,
            user_identifier=user_identifier,
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            details=details
        )
        try:
            db.add(entry)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error logging activity {action} on {entity_type} {entity_id}: {str(e)}")
            return None
        return entry


# Singleton instance
activity_service = ActivityService()
