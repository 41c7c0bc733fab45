from datetime import datetime
from typing import Optional

from ...shared.schemas import CamelModel


class AuditLogResponse(CamelModel):
    id: int
    user_id: int
    user_name: str
    user_email: str
    action: str
    table_name: str
    record_id: Optional[int] = None
    description: Optional[str] = None
    old_data: Optional[str] = None
    new_data: Optional[str] = None
    status: str
    error_message: Optional[str] = None
    created_at: Optional[datetime] = None
