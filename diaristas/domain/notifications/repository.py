"""Notification repository - Database operations for the admin notification feed"""

from typing import Optional

from sqlalchemy.orm import Session

from ...database import degrade_when_unavailable
from ...models import Notification


class NotificationRepository:
    """Repository for notification feed database operations"""

    @staticmethod
    @degrade_when_unavailable([])
    def get_notifications(db: Session, user_id: int, unread_only: bool = False) -> list[Notification]:
        query = db.query(Notification).filter(Notification.user_id == user_id)
        if unread_only:
            query = query.filter(Notification.read.is_(False))
        return query.order_by(Notification.created_at.desc(), Notification.id.desc()).all()

    @staticmethod
    @degrade_when_unavailable(0)
    def count_unread(db: Session, user_id: int) -> int:
        return (
            db.query(Notification)
            .filter(Notification.user_id == user_id, Notification.read.is_(False))
            .count()
        )

    @staticmethod
    @degrade_when_unavailable()
    def get_notification_by_id(db: Session, notification_id: int, user_id: int) -> Optional[Notification]:
        return (
            db.query(Notification)
            .filter(Notification.id == notification_id, Notification.user_id == user_id)
            .first()
        )

    @staticmethod
    @degrade_when_unavailable()
    def create_notification(db: Session, **notification_data) -> Notification:
        notification = Notification(**notification_data)
        db.add(notification)
        db.commit()
        db.refresh(notification)
        return notification

    @staticmethod
    @degrade_when_unavailable()
    def mark_read(db: Session, notification: Notification) -> Notification:
        notification.read = True
        db.commit()
        db.refresh(notification)
        return notification

    @staticmethod
    @degrade_when_unavailable(0)
    def mark_all_read(db: Session, user_id: int) -> int:
        updated = (
            db.query(Notification)
            .filter(Notification.user_id == user_id, Notification.read.is_(False))
            .update({Notification.read: True}, synchronize_session=False)
        )
        db.commit()
        return updated
