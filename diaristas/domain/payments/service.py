"""Payment service - Payment workflow and payment record rules"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...access import can_list_all
from ...exceptions import NotFoundError, ValidationError
from ...models import Payment, User
from ...services.audit import create_audit_log, snapshot
from ...services.notification_service import (
    NotificationDispatcher,
    WorkflowEvent,
    dispatch_payment_notices,
    run_post_commit_hooks,
)
from ...shared.currency import extract_amount_from_text, format_brl
from ...shared.validators import reject_nulls
from ..bookings.repository import BookingRepository
from ..notifications.service import record_payment_registered
from ..staff.repository import StaffRepository
from .repository import PaymentRepository
from .schemas import PaymentCreate, PaymentUpdate

logger = logging.getLogger(__name__)


class PaymentService:
    """Service layer for payment business logic"""

    # Run when the submitted status is "paid" or omitted and the staff member resolves
    notification_hooks = (dispatch_payment_notices,)
    post_create_hooks = (record_payment_registered,)

    def __init__(self, db: Optional[Session], dispatcher: NotificationDispatcher):
        self.db = db
        self.dispatcher = dispatcher
        self.repo = PaymentRepository()
        self.booking_repo = BookingRepository()
        self.staff_repo = StaffRepository()

    @staticmethod
    def _owner_scope(user: User) -> Optional[int]:
        return None if can_list_all(user.role) else user.id

    def get_payments(self, user: User) -> list[Payment]:
        return self.repo.get_payments(self.db, self._owner_scope(user))

    def get_payments_for_staff(self, staff_member_id: int, user: User) -> list[Payment]:
        return self.repo.get_payments_for_staff(self.db, staff_member_id, self._owner_scope(user))

    def get_payment(self, payment_id: int, user: User) -> Payment:
        payment = self.repo.get_payment_by_id(self.db, payment_id, self._owner_scope(user))
        if not payment:
            raise NotFoundError("Payment not found")
        return payment

    async def create_payment(self, data: PaymentCreate, user: User) -> Optional[Payment]:
        """
        Register a payment and notify the coordinator and the staff member.

        An omitted status is stored as "pending" but is still treated as paid
        for notification purposes. The staff member is not required to exist:
        the payment is stored and only the notices are skipped.

        Returns:
            The persisted payment, or None when the database is unavailable
        """
        logger.info(f"📥 Registering payment for user_id: {user.id}, staff_member_id: {data.staff_member_id}")

        if data.booking_id is not None and self.db is not None:
            if not self.booking_repo.get_booking_by_id(self.db, data.booking_id, self._owner_scope(user)):
                raise NotFoundError(f"Booking {data.booking_id} not found")

        payment = self.repo.create_payment(
            self.db,
            user.id,
            staff_member_id=data.staff_member_id,
            booking_id=data.booking_id,
            amount=data.amount,
            payment_date=data.payment_date,
            method=data.method,
            status=data.status or "pending",
            description=data.description,
            proof_reference=data.proof_reference,
        )
        if payment is None:
            return None

        logger.info(f"✅ Payment {payment.id} registered: {format_brl(payment.amount)} ({payment.status})")

        create_audit_log(
            self.db,
            user,
            "create",
            "payments",
            payment.id,
            description=f"Pagamento de {format_brl(payment.amount)} registrado",
            new_data=snapshot(payment),
        )

        staff_member = self.staff_repo.get_staff_member_by_id(self.db, data.staff_member_id)
        event = WorkflowEvent(
            db=self.db, dispatcher=self.dispatcher, actor=user, staff_member=staff_member, payment=payment
        )

        if data.status in ("paid", None):
            if staff_member:
                await run_post_commit_hooks(self.notification_hooks, event)
            else:
                logger.warning(f"⚠️ Staff member {data.staff_member_id} not found, payment notices skipped")
        await run_post_commit_hooks(self.post_create_hooks, event)

        return payment

    def update_payment(self, payment_id: int, data: PaymentUpdate, user: User) -> Payment:
        payment = self.get_payment(payment_id, user)
        old_data = snapshot(payment)

        updates = data.model_dump(exclude_unset=True)
        reject_nulls(updates, ("amount", "payment_date", "method", "status"))
        payment = self.repo.update_payment(self.db, payment, **updates)

        create_audit_log(
            self.db,
            user,
            "update",
            "payments",
            payment_id,
            description=f"Pagamento {payment_id} atualizado",
            old_data=old_data,
            new_data=snapshot(payment),
        )
        return payment

    def delete_payment(self, payment_id: int, user: User) -> dict:
        payment = self.get_payment(payment_id, user)

        if self.repo.count_receipts(self.db, payment_id):
            raise ValidationError("Payment has receipts and cannot be deleted")

        old_data = snapshot(payment)
        self.repo.delete_payment(self.db, payment)
        create_audit_log(
            self.db,
            user,
            "delete",
            "payments",
            payment_id,
            description=f"Pagamento {payment_id} removido",
            old_data=old_data,
        )
        return {"message": "Payment deleted"}

    @staticmethod
    def extract_amount(text: str) -> dict:
        """Read an amount from the OCR text of a proof of payment"""
        amount = extract_amount_from_text(text)
        if amount is None:
            logger.info("🔍 No amount found in extracted text")
            return {"amount_cents": None, "formatted": None}
        return {"amount_cents": amount, "formatted": format_brl(amount)}
