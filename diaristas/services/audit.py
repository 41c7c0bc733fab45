"""
Audit logging service.
Append-only record of the mutating actions taken through the API.
"""

import json
import logging
from typing import Any, Optional

from sqlalchemy.orm import Session

from ..database import degrade_when_unavailable
from ..models import AuditLog, User

logger = logging.getLogger(__name__)


def _to_json(data: Optional[dict[str, Any]]) -> Optional[str]:
    if data is None:
        return None
    return json.dumps(data, sort_keys=True, default=str, ensure_ascii=False)


def snapshot(obj) -> dict[str, Any]:
    """Column values of an ORM object, for old/new data"""
    return {column.name: getattr(obj, column.name) for column in obj.__table__.columns}


@degrade_when_unavailable()
def create_audit_log(
    db: Session,
    actor: User,
    action: str,
    table_name: str,
    record_id: Optional[int] = None,
    description: Optional[str] = None,
    old_data: Optional[dict[str, Any]] = None,
    new_data: Optional[dict[str, Any]] = None,
    status: str = "success",
    error_message: Optional[str] = None,
) -> Optional[AuditLog]:
    """
    Append an audit log entry.

    Args:
        db: Database session
        actor: User who performed the action
        action: create | update | delete | status_change | role_change | sign
        table_name: Table of the affected record
        record_id: ID of the affected record
        description: Human readable summary
        old_data: Values before the change
        new_data: Values after the change

    A failure to write the entry is logged and does not affect the audited action.
    """
    entry = AuditLog(
        user_id=actor.id,
        user_name=actor.name or "",
        user_email=actor.email or "",
        action=action,
        table_name=table_name,
        record_id=record_id,
        description=description,
        old_data=_to_json(old_data),
        new_data=_to_json(new_data),
        status=status,
        error_message=error_message,
    )
    try:
        db.add(entry)
        db.commit()
        db.refresh(entry)
    except Exception as e:
        db.rollback()
        logger.error(f"❌ Failed to write audit log for {action} on {table_name}#{record_id}: {e}")
        return None
    return entry
