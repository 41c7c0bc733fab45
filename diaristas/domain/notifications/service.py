"""Notification service - Admin notification feed and the hooks that fill it"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...exceptions import NotFoundError
from ...models import Notification, User
from ...services.notification_service import WorkflowEvent
from ...shared.currency import format_brl
from .repository import NotificationRepository

logger = logging.getLogger(__name__)

# Presentation defaults per notification type
NOTIFICATION_STYLES = {
    "staff_registered": ("👤", "blue"),
    "booking_created": ("📅", "purple"),
    "payment_registered": ("💳", "green"),
    "receipt_issued": ("📋", "yellow"),
}


class NotificationService:
    """Service layer for the admin notification feed"""

    def __init__(self, db: Optional[Session]):
        self.db = db
        self.repo = NotificationRepository()

    def get_notifications(self, user: User, unread_only: bool = False) -> list[Notification]:
        return self.repo.get_notifications(self.db, user.id, unread_only)

    def get_unread_count(self, user: User) -> int:
        return self.repo.count_unread(self.db, user.id)

    def mark_read(self, notification_id: int, user: User) -> Notification:
        notification = self.repo.get_notification_by_id(self.db, notification_id, user.id)
        if not notification:
            raise NotFoundError("Notification not found")
        return self.repo.mark_read(self.db, notification)

    def mark_all_read(self, user: User) -> dict:
        updated = self.repo.mark_all_read(self.db, user.id)
        return {"message": "Notifications marked as read", "updatedCount": updated}

    def create(
        self,
        user_id: int,
        notification_type: str,
        title: str,
        description: Optional[str] = None,
        record_id: Optional[int] = None,
        related_table: Optional[str] = None,
        whatsapp_sent: bool = False,
    ) -> Optional[Notification]:
        icon, color = NOTIFICATION_STYLES.get(notification_type, ("📋", "gray"))
        notification = self.repo.create_notification(
            self.db,
            user_id=user_id,
            type=notification_type,
            title=title,
            description=description,
            icon=icon,
            color=color,
            whatsapp_sent=whatsapp_sent,
            record_id=record_id,
            related_table=related_table,
        )
        if notification:
            logger.info(f"🔔 Notification '{notification_type}' created for user {user_id}")
        return notification


# ============================================================================
# POST-COMMIT HOOKS
# ============================================================================


async def record_staff_registered(event: WorkflowEvent) -> bool:
    staff = event.staff_member
    return (
        NotificationService(event.db).create(
            user_id=event.actor.id,
            notification_type="staff_registered",
            title="✅ Nova Diarista Cadastrada",
            description=f"{staff.name} foi adicionada ao sistema",
            record_id=staff.id,
            related_table="staff_members",
        )
        is not None
    )


async def record_booking_created(event: WorkflowEvent) -> bool:
    booking = event.booking
    return (
        NotificationService(event.db).create(
            user_id=event.actor.id,
            notification_type="booking_created",
            title="📅 Novo Agendamento",
            description=f"{event.staff_member.name} agendada para {booking.service_address}",
            record_id=booking.id,
            related_table="bookings",
        )
        is not None
    )


async def record_payment_registered(event: WorkflowEvent) -> bool:
    payment = event.payment
    staff_name = event.staff_member.name if event.staff_member else f"Diarista #{payment.staff_member_id}"
    return (
        NotificationService(event.db).create(
            user_id=event.actor.id,
            notification_type="payment_registered",
            title="💳 Pagamento Registrado",
            description=f"{staff_name} recebeu {format_brl(payment.amount)}",
            record_id=payment.id,
            related_table="payments",
        )
        is not None
    )


async def record_receipt_issued(event: WorkflowEvent) -> bool:
    receipt = event.receipt
    staff_name = event.staff_member.name if event.staff_member else f"Diarista #{receipt.staff_member_id}"
    return (
        NotificationService(event.db).create(
            user_id=event.actor.id,
            notification_type="receipt_issued",
            title="📋 Recibo Emitido",
            description=f"Recibo gerado para {staff_name}",
            record_id=receipt.id,
            related_table="receipts",
        )
        is not None
    )
