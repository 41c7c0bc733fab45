"""Rating service - Staff member ratings"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...access import can_list_all
from ...exceptions import NotFoundError, ValidationError
from ...models import Rating, User
from ...services.audit import create_audit_log, snapshot
from ...services.notification_service import (
    NotificationDispatcher,
    WorkflowEvent,
    dispatch_rating_to_staff,
    run_post_commit_hooks,
)
from ...shared.validators import reject_nulls
from ..bookings.repository import BookingRepository
from ..staff.repository import StaffRepository
from .repository import RatingRepository
from .schemas import RatingCreate, RatingUpdate

logger = logging.getLogger(__name__)


class RatingService:
    post_create_hooks = (dispatch_rating_to_staff,)

    def __init__(self, db: Optional[Session], dispatcher: NotificationDispatcher):
        self.db = db
        self.dispatcher = dispatcher
        self.repo = RatingRepository()
        self.booking_repo = BookingRepository()
        self.staff_repo = StaffRepository()

    def get_ratings_for_staff(self, staff_member_id: int) -> list[Rating]:
        return self.repo.get_ratings_for_staff(self.db, staff_member_id)

    def get_average(self, staff_member_id: int) -> dict:
        average, count = self.repo.get_average_for_staff(self.db, staff_member_id)
        return {"staff_member_id": staff_member_id, "average": round(average, 2), "count": count}

    async def create_rating(self, data: RatingCreate, user: User) -> Optional[Rating]:
        """Rate a staff member for a booking and let them know on WhatsApp"""
        staff_member = None
        if self.db is not None:
            staff_member = self.staff_repo.get_staff_member_by_id(self.db, data.staff_member_id)
            if not staff_member:
                raise NotFoundError(f"Staff member {data.staff_member_id} not found")

            owner = None if can_list_all(user.role) else user.id
            booking = self.booking_repo.get_booking_by_id(self.db, data.booking_id, owner)
            if not booking:
                raise NotFoundError(f"Booking {data.booking_id} not found")
            if booking.staff_member_id != data.staff_member_id:
                raise ValidationError("Booking was not assigned to this staff member")

        rating = self.repo.create_rating(
            self.db,
            user.id,
            staff_member_id=data.staff_member_id,
            booking_id=data.booking_id,
            score=data.score,
            comment=data.comment,
        )
        if rating is None:
            return None

        logger.info(f"⭐ Rating {rating.id} ({rating.score}) created for staff member {rating.staff_member_id}")

        create_audit_log(
            self.db,
            user,
            "create",
            "ratings",
            rating.id,
            description=f"Avaliação de {rating.score} estrelas para {staff_member.name}",
            new_data=snapshot(rating),
        )

        await run_post_commit_hooks(
            self.post_create_hooks,
            WorkflowEvent(
                db=self.db, dispatcher=self.dispatcher, actor=user, staff_member=staff_member, rating=rating
            ),
        )
        return rating

    def update_rating(self, rating_id: int, data: RatingUpdate, user: User) -> Rating:
        rating = self.repo.get_rating_by_id(self.db, rating_id)
        if not rating or (rating.user_id != user.id and not can_list_all(user.role)):
            raise NotFoundError("Rating not found")

        old_data = snapshot(rating)
        updates = data.model_dump(exclude_unset=True)
        reject_nulls(updates, ("score",))
        rating = self.repo.update_rating(self.db, rating, **updates)

        create_audit_log(
            self.db,
            user,
            "update",
            "ratings",
            rating_id,
            description=f"Avaliação {rating_id} atualizada",
            old_data=old_data,
            new_data=snapshot(rating),
        )
        return rating
