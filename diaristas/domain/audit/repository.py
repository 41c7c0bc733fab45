"""Audit log repository - Read access to the audit trail"""

from typing import Optional

from sqlalchemy.orm import Session

from ...database import degrade_when_unavailable
from ...models import AuditLog


class AuditLogRepository:
    @staticmethod
    @degrade_when_unavailable([])
    def get_audit_logs(
        db: Session,
        table_name: Optional[str] = None,
        record_id: Optional[int] = None,
        limit: int = 100,
    ) -> list[AuditLog]:
        """Most recent entries first"""
        query = db.query(AuditLog)
        if table_name:
            query = query.filter(AuditLog.table_name == table_name)
        if record_id is not None:
            query = query.filter(AuditLog.record_id == record_id)
        return query.order_by(AuditLog.created_at.desc(), AuditLog.id.desc()).limit(limit).all()
