"""Payment repository - Database operations for payments"""

from typing import Optional

from sqlalchemy.orm import Session

from ...database import degrade_when_unavailable
from ...models import Payment, Receipt


class PaymentRepository:
    """Repository for payment database operations"""

    @staticmethod
    @degrade_when_unavailable([])
    def get_payments(db: Session, user_id: Optional[int] = None) -> list[Payment]:
        """Get payments, most recent payment date first"""
        query = db.query(Payment)
        if user_id is not None:
            query = query.filter(Payment.user_id == user_id)
        return query.order_by(Payment.payment_date.desc(), Payment.id.desc()).all()

    @staticmethod
    @degrade_when_unavailable([])
    def get_payments_for_staff(
        db: Session, staff_member_id: int, user_id: Optional[int] = None
    ) -> list[Payment]:
        query = db.query(Payment).filter(Payment.staff_member_id == staff_member_id)
        if user_id is not None:
            query = query.filter(Payment.user_id == user_id)
        return query.order_by(Payment.payment_date.desc(), Payment.id.desc()).all()

    @staticmethod
    @degrade_when_unavailable()
    def get_payment_by_id(db: Session, payment_id: int, user_id: Optional[int] = None) -> Optional[Payment]:
        query = db.query(Payment).filter(Payment.id == payment_id)
        if user_id is not None:
            query = query.filter(Payment.user_id == user_id)
        return query.first()

    @staticmethod
    @degrade_when_unavailable()
    def create_payment(db: Session, user_id: int, **payment_data) -> Payment:
        payment = Payment(user_id=user_id, **payment_data)
        db.add(payment)
        db.commit()
        db.refresh(payment)
        return payment

    @staticmethod
    @degrade_when_unavailable()
    def update_payment(db: Session, payment: Payment, **updates) -> Payment:
        for key, value in updates.items():
            if hasattr(payment, key):
                setattr(payment, key, value)

        db.commit()
        db.refresh(payment)
        return payment

    @staticmethod
    @degrade_when_unavailable()
    def delete_payment(db: Session, payment: Payment) -> None:
        db.delete(payment)
        db.commit()

    @staticmethod
    @degrade_when_unavailable(0)
    def count_receipts(db: Session, payment_id: int) -> int:
        return db.query(Receipt).filter(Receipt.payment_id == payment_id).count()
