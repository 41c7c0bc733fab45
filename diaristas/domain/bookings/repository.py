"""Booking repository - Database operations for bookings"""

from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...database import degrade_when_unavailable
from ...models import Booking, Payment, Rating, Receipt


class BookingRepository:
    """
    Repository for booking database operations.

    `user_id=None` means "every owner"; callers decide that through access control.
    """

    @staticmethod
    def _base_query(db: Session):
        return db.query(Booking).options(joinedload(Booking.specialty), joinedload(Booking.staff_member))

    @staticmethod
    @degrade_when_unavailable([])
    def get_bookings(
        db: Session, user_id: Optional[int] = None, status: Optional[str] = None
    ) -> list[Booking]:
        """Get bookings, newest start date first"""
        query = BookingRepository._base_query(db)
        if user_id is not None:
            query = query.filter(Booking.user_id == user_id)
        if status:
            query = query.filter(Booking.status == status)
        return query.order_by(Booking.start_date.desc(), Booking.id.desc()).all()

    @staticmethod
    @degrade_when_unavailable([])
    def get_bookings_for_staff(
        db: Session, staff_member_id: int, user_id: Optional[int] = None
    ) -> list[Booking]:
        query = BookingRepository._base_query(db).filter(Booking.staff_member_id == staff_member_id)
        if user_id is not None:
            query = query.filter(Booking.user_id == user_id)
        return query.order_by(Booking.start_date.desc(), Booking.id.desc()).all()

    @staticmethod
    @degrade_when_unavailable()
    def get_booking_by_id(db: Session, booking_id: int, user_id: Optional[int] = None) -> Optional[Booking]:
        query = BookingRepository._base_query(db).filter(Booking.id == booking_id)
        if user_id is not None:
            query = query.filter(Booking.user_id == user_id)
        return query.first()

    @staticmethod
    @degrade_when_unavailable()
    def create_booking(db: Session, user_id: int, **booking_data) -> Booking:
        booking = Booking(user_id=user_id, **booking_data)
        db.add(booking)
        db.commit()
        db.refresh(booking)
        return booking

    @staticmethod
    @degrade_when_unavailable()
    def update_booking(db: Session, booking: Booking, **updates) -> Booking:
        for key, value in updates.items():
            if hasattr(booking, key):
                setattr(booking, key, value)

        db.commit()
        db.refresh(booking)
        return booking

    @staticmethod
    @degrade_when_unavailable()
    def delete_booking(db: Session, booking: Booking) -> None:
        db.delete(booking)
        db.commit()

    @staticmethod
    @degrade_when_unavailable(0)
    def count_dependents(db: Session, booking_id: int) -> int:
        """Payments, ratings and receipts that reference the booking"""
        return (
            db.query(Payment).filter(Payment.booking_id == booking_id).count()
            + db.query(Rating).filter(Rating.booking_id == booking_id).count()
            + db.query(Receipt).filter(Receipt.booking_id == booking_id).count()
        )
