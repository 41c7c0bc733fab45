"""Receipt repository - Database operations for receipts"""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from ...database import degrade_when_unavailable
from ...models import Payment, Receipt


class ReceiptRepository:
    """Receipts are scoped to an owner through the payment they belong to"""

    @staticmethod
    def _scoped_query(db: Session, user_id: Optional[int]):
        query = db.query(Receipt)
        if user_id is not None:
            query = query.join(Payment, Payment.id == Receipt.payment_id).filter(Payment.user_id == user_id)
        return query

    @staticmethod
    @degrade_when_unavailable([])
    def get_receipts(
        db: Session, user_id: Optional[int] = None, staff_member_id: Optional[int] = None
    ) -> list[Receipt]:
        query = ReceiptRepository._scoped_query(db, user_id)
        if staff_member_id is not None:
            query = query.filter(Receipt.staff_member_id == staff_member_id)
        return query.order_by(Receipt.created_at.desc(), Receipt.id.desc()).all()

    @staticmethod
    @degrade_when_unavailable()
    def get_receipt_by_id(db: Session, receipt_id: int, user_id: Optional[int] = None) -> Optional[Receipt]:
        return ReceiptRepository._scoped_query(db, user_id).filter(Receipt.id == receipt_id).first()

    @staticmethod
    @degrade_when_unavailable()
    def create_receipt(db: Session, **receipt_data) -> Receipt:
        receipt = Receipt(**receipt_data)
        db.add(receipt)
        db.commit()
        db.refresh(receipt)
        return receipt

    @staticmethod
    @degrade_when_unavailable()
    def mark_signed(db: Session, receipt: Receipt) -> Receipt:
        receipt.signed = True
        receipt.signed_at = datetime.now()
        db.commit()
        db.refresh(receipt)
        return receipt
