"""Booking service - Booking workflow and booking lifecycle rules"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...access import can_list_all
from ...exceptions import NotFoundError, ValidationError
from ...models import Booking, User
from ...services.audit import create_audit_log, snapshot
from ...services.notification_service import (
    NotificationDispatcher,
    WorkflowEvent,
    dispatch_booking_to_coordinator,
    dispatch_booking_to_staff,
    run_post_commit_hooks,
)
from ...shared.validators import reject_nulls
from ..notifications.service import record_booking_created
from ..pricing import compute_total
from ..specialties.repository import SpecialtyRepository
from ..staff.repository import StaffRepository
from .repository import BookingRepository
from .schemas import BookingCreate, BookingUpdate

logger = logging.getLogger(__name__)

# Cannot be cleared by an update
REQUIRED_FIELDS = ("staff_member_id", "specialty_id", "service_address", "start_date", "end_date", "daily_rate")

# Allowed status transitions; completed and canceled are terminal
STATUS_TRANSITIONS = {
    "scheduled": {"completed", "canceled"},
    "completed": set(),
    "canceled": set(),
}


class BookingService:
    """Service layer for booking business logic"""

    # Run only when the total is non-zero and the staff member resolves
    notification_hooks = (dispatch_booking_to_coordinator, dispatch_booking_to_staff)
    post_create_hooks = (record_booking_created,)

    def __init__(self, db: Optional[Session], dispatcher: NotificationDispatcher):
        self.db = db
        self.dispatcher = dispatcher
        self.repo = BookingRepository()
        self.staff_repo = StaffRepository()
        self.specialty_repo = SpecialtyRepository()

    @staticmethod
    def _owner_scope(user: User) -> Optional[int]:
        return None if can_list_all(user.role) else user.id

    def get_bookings(self, user: User, status: Optional[str] = None) -> list[Booking]:
        return self.repo.get_bookings(self.db, self._owner_scope(user), status)

    def get_bookings_for_staff(self, staff_member_id: int, user: User) -> list[Booking]:
        return self.repo.get_bookings_for_staff(self.db, staff_member_id, self._owner_scope(user))

    def get_booking(self, booking_id: int, user: User) -> Booking:
        booking = self.repo.get_booking_by_id(self.db, booking_id, self._owner_scope(user))
        if not booking:
            raise NotFoundError("Booking not found")
        return booking

    def _resolve_references(self, staff_member_id: int, specialty_id: int):
        """Staff member and specialty for a booking; skipped without a database"""
        if self.db is None:
            return None, None

        staff_member = self.staff_repo.get_staff_member_by_id(self.db, staff_member_id)
        if not staff_member:
            raise ValidationError(f"Staff member {staff_member_id} not found")

        specialty = self.specialty_repo.get_specialty_by_id(self.db, specialty_id)
        if not specialty:
            raise ValidationError(f"Specialty {specialty_id} not found")

        return staff_member, specialty

    async def create_booking(self, data: BookingCreate, user: User) -> Optional[Booking]:
        """
        Create a booking and notify the coordinator and the staff member.

        Validation happens before anything is written. Once the booking is
        committed, notification failures are logged and never fail the call.

        Returns:
            The persisted booking, or None when the database is unavailable
        """
        logger.info(f"📥 Creating booking for user_id: {user.id}, staff_member_id: {data.staff_member_id}")

        service_address = data.service_address.strip()
        if not service_address:
            raise ValidationError("Service address is required")

        total_price = compute_total(data.daily_rate, data.start_date, data.end_date)
        if data.total_price is not None and data.total_price != total_price:
            logger.warning(
                f"⚠️ Supplied total {data.total_price} does not match computed total {total_price}, "
                "using computed value"
            )

        staff_member, specialty = self._resolve_references(data.staff_member_id, data.specialty_id)

        booking = self.repo.create_booking(
            self.db,
            user.id,
            staff_member_id=data.staff_member_id,
            specialty_id=data.specialty_id,
            service_address=service_address,
            start_date=data.start_date,
            end_date=data.end_date,
            description=data.description,
            notes=data.notes,
            status="scheduled",
            daily_rate=data.daily_rate,
            total_price=total_price,
        )
        if booking is None:
            return None

        logger.info(f"✅ Booking {booking.id} created with total {total_price}")

        create_audit_log(
            self.db,
            user,
            "create",
            "bookings",
            booking.id,
            description=f"Agendamento criado para {staff_member.name}",
            new_data=snapshot(booking),
        )

        event = WorkflowEvent(
            db=self.db,
            dispatcher=self.dispatcher,
            actor=user,
            staff_member=staff_member,
            specialty=specialty,
            booking=booking,
        )
        if total_price > 0:
            await run_post_commit_hooks(self.notification_hooks, event)
        else:
            logger.info(f"ℹ️ Booking {booking.id} has no value, WhatsApp notices skipped")
        await run_post_commit_hooks(self.post_create_hooks, event)

        return booking

    def update_booking(self, booking_id: int, data: BookingUpdate, user: User) -> Booking:
        """Update booking fields and/or move it along the status state machine"""
        booking = self.get_booking(booking_id, user)
        old_data = snapshot(booking)
        updates = data.model_dump(exclude_unset=True)
        reject_nulls(updates, REQUIRED_FIELDS)

        new_status = updates.pop("status", None)
        if new_status and new_status != booking.status:
            if new_status not in STATUS_TRANSITIONS[booking.status]:
                raise ValidationError(f"Cannot change booking status from {booking.status} to {new_status}")
            updates["status"] = new_status

        if updates.keys() - {"status"} and booking.status != "scheduled":
            raise ValidationError(f"Cannot edit a {booking.status} booking")

        if "service_address" in updates:
            updates["service_address"] = (updates["service_address"] or "").strip()
            if not updates["service_address"]:
                raise ValidationError("Service address is required")

        if "staff_member_id" in updates or "specialty_id" in updates:
            self._resolve_references(
                updates.get("staff_member_id", booking.staff_member_id),
                updates.get("specialty_id", booking.specialty_id),
            )

        if updates.keys() & {"daily_rate", "start_date", "end_date"}:
            updates["total_price"] = compute_total(
                updates.get("daily_rate", booking.daily_rate),
                updates.get("start_date", booking.start_date),
                updates.get("end_date", booking.end_date),
            )

        booking = self.repo.update_booking(self.db, booking, **updates)

        action = "status_change" if new_status and list(updates) == ["status"] else "update"
        create_audit_log(
            self.db,
            user,
            action,
            "bookings",
            booking_id,
            description=f"Agendamento {booking_id} atualizado",
            old_data=old_data,
            new_data=snapshot(booking),
        )
        return booking

    def cancel_booking(self, booking_id: int, user: User) -> Booking:
        return self.update_booking(booking_id, BookingUpdate(status="canceled"), user)

    def complete_booking(self, booking_id: int, user: User) -> Booking:
        return self.update_booking(booking_id, BookingUpdate(status="completed"), user)

    def delete_booking(self, booking_id: int, user: User) -> dict:
        booking = self.get_booking(booking_id, user)

        if self.repo.count_dependents(self.db, booking_id):
            raise ValidationError("Booking has payments, ratings or receipts; cancel it instead")

        old_data = snapshot(booking)
        self.repo.delete_booking(self.db, booking)
        create_audit_log(
            self.db,
            user,
            "delete",
            "bookings",
            booking_id,
            description=f"Agendamento {booking_id} removido",
            old_data=old_data,
        )
        logger.info(f"🗑️ Booking {booking_id} deleted by user {user.id}")
        return {"message": "Booking deleted"}
