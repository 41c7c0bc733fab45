"""Notification domain schemas"""

from datetime import datetime
from typing import Optional

from ...shared.schemas import CamelModel


class NotificationResponse(CamelModel):
    id: int
    type: str
    title: str
    description: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    read: bool
    whatsapp_sent: bool
    record_id: Optional[int] = None
    related_table: Optional[str] = None
    created_at: Optional[datetime] = None


class UnreadCountResponse(CamelModel):
    unread_count: int
