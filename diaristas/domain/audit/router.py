"""Audit log router - Admin-only audit trail listing"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_admin
from ...database import get_db
from ...models import User
from .repository import AuditLogRepository
from .schemas import AuditLogResponse

router = APIRouter(prefix="/audit-logs", tags=["Audit"])


@router.get("", response_model=list[AuditLogResponse])
async def get_audit_logs(
    table_name: Optional[str] = Query(None, alias="tableName"),
    record_id: Optional[int] = Query(None, alias="recordId"),
    limit: int = Query(100, ge=1, le=1000),
    current_user: User = Depends(get_current_admin),
    db: Optional[Session] = Depends(get_db),
):
    """List audit log entries, newest first"""
    return AuditLogRepository.get_audit_logs(db, table_name, record_id, limit)
