"""Receipt service - Receipt records for paid bookings"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...access import can_list_all
from ...exceptions import NotFoundError, ValidationError
from ...models import Receipt, User
from ...services.audit import create_audit_log, snapshot
from ...services.notification_service import (
    NotificationDispatcher,
    WorkflowEvent,
    run_post_commit_hooks,
)
from ..bookings.repository import BookingRepository
from ..notifications.service import record_receipt_issued
from ..payments.repository import PaymentRepository
from ..staff.repository import StaffRepository
from .repository import ReceiptRepository
from .schemas import ReceiptCreate

logger = logging.getLogger(__name__)


class ReceiptService:
    post_create_hooks = (record_receipt_issued,)

    def __init__(self, db: Optional[Session], dispatcher: NotificationDispatcher):
        self.db = db
        self.dispatcher = dispatcher
        self.repo = ReceiptRepository()
        self.booking_repo = BookingRepository()
        self.payment_repo = PaymentRepository()
        self.staff_repo = StaffRepository()

    @staticmethod
    def _owner_scope(user: User) -> Optional[int]:
        return None if can_list_all(user.role) else user.id

    def get_receipts(self, user: User, staff_member_id: Optional[int] = None) -> list[Receipt]:
        return self.repo.get_receipts(self.db, self._owner_scope(user), staff_member_id)

    def get_receipt(self, receipt_id: int, user: User) -> Receipt:
        receipt = self.repo.get_receipt_by_id(self.db, receipt_id, self._owner_scope(user))
        if not receipt:
            raise NotFoundError("Receipt not found")
        return receipt

    async def issue_receipt(self, data: ReceiptCreate, user: User) -> Optional[Receipt]:
        """Record the receipt of a payment; booking, payment and staff member must exist"""
        staff_member = None
        if self.db is not None:
            owner = self._owner_scope(user)
            if not self.booking_repo.get_booking_by_id(self.db, data.booking_id, owner):
                raise NotFoundError(f"Booking {data.booking_id} not found")

            payment = self.payment_repo.get_payment_by_id(self.db, data.payment_id, owner)
            if not payment:
                raise NotFoundError(f"Payment {data.payment_id} not found")
            if payment.booking_id is not None and payment.booking_id != data.booking_id:
                raise ValidationError("Payment belongs to a different booking")

            staff_member = self.staff_repo.get_staff_member_by_id(self.db, data.staff_member_id)
            if not staff_member:
                raise NotFoundError(f"Staff member {data.staff_member_id} not found")

        receipt = self.repo.create_receipt(
            self.db,
            booking_id=data.booking_id,
            payment_id=data.payment_id,
            staff_member_id=data.staff_member_id,
            document_url=data.document_url,
            signed=False,
        )
        if receipt is None:
            return None

        logger.info(f"📋 Receipt {receipt.id} issued for payment {receipt.payment_id}")

        create_audit_log(
            self.db,
            user,
            "create",
            "receipts",
            receipt.id,
            description=f"Recibo emitido para {staff_member.name}",
            new_data=snapshot(receipt),
        )

        await run_post_commit_hooks(
            self.post_create_hooks,
            WorkflowEvent(
                db=self.db, dispatcher=self.dispatcher, actor=user, staff_member=staff_member, receipt=receipt
            ),
        )
        return receipt

    def sign_receipt(self, receipt_id: int, user: User) -> Receipt:
        receipt = self.get_receipt(receipt_id, user)
        if receipt.signed:
            raise ValidationError("Receipt is already signed")

        old_data = snapshot(receipt)
        receipt = self.repo.mark_signed(self.db, receipt)
        create_audit_log(
            self.db,
            user,
            "sign",
            "receipts",
            receipt_id,
            description=f"Recibo {receipt_id} assinado",
            old_data=old_data,
            new_data=snapshot(receipt),
        )
        return receipt
