"""Report repository - Aggregate queries over bookings, payments and staff"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ...database import degrade_when_unavailable
from ...models import Booking, Payment, StaffMember


class ReportRepository:
    """Aggregations; `user_id=None` covers every owner"""

    @staticmethod
    @degrade_when_unavailable([])
    def count_bookings_by_status(db: Session, user_id: Optional[int] = None) -> list[tuple[str, int]]:
        query = db.query(Booking.status, func.count(Booking.id))
        if user_id is not None:
            query = query.filter(Booking.user_id == user_id)
        return query.group_by(Booking.status).all()

    @staticmethod
    @degrade_when_unavailable([])
    def sum_payments_by_status(db: Session, user_id: Optional[int] = None) -> list[tuple[str, int]]:
        query = db.query(Payment.status, func.coalesce(func.sum(Payment.amount), 0))
        if user_id is not None:
            query = query.filter(Payment.user_id == user_id)
        return query.group_by(Payment.status).all()

    @staticmethod
    @degrade_when_unavailable([])
    def sum_payments_by_method(db: Session, user_id: Optional[int] = None) -> list[tuple[str, int, int]]:
        query = db.query(Payment.method, func.coalesce(func.sum(Payment.amount), 0), func.count(Payment.id))
        if user_id is not None:
            query = query.filter(Payment.user_id == user_id)
        return query.group_by(Payment.method).all()

    @staticmethod
    @degrade_when_unavailable(0)
    def count_active_staff(db: Session) -> int:
        return db.query(StaffMember).filter(StaffMember.active.is_(True)).count()

    @staticmethod
    @degrade_when_unavailable([])
    def get_payments_with_staff(
        db: Session, user_id: Optional[int] = None
    ) -> list[tuple[Payment, Optional[str]]]:
        """Payments paired with the staff member name (None when the staff record is gone)"""
        query = db.query(Payment, StaffMember.name).outerjoin(
            StaffMember, StaffMember.id == Payment.staff_member_id
        )
        if user_id is not None:
            query = query.filter(Payment.user_id == user_id)
        return query.order_by(Payment.payment_date.desc(), Payment.id.desc()).all()
