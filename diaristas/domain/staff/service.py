"""Staff service - Business logic for staff member operations"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...exceptions import NotFoundError, ValidationError
from ...models import StaffMember, StaffSpecialty, User
from ...services.audit import create_audit_log, snapshot
from ...services.notification_service import (
    NotificationDispatcher,
    WorkflowEvent,
    run_post_commit_hooks,
)
from ...shared.validators import reject_nulls
from ..notifications.service import record_staff_registered
from ..specialties.repository import SpecialtyRepository
from .repository import StaffRepository
from .schemas import StaffMemberCreate, StaffMemberUpdate

logger = logging.getLogger(__name__)


class StaffService:
    """Service layer for staff member business logic"""

    post_create_hooks = (record_staff_registered,)

    def __init__(self, db: Optional[Session], dispatcher: NotificationDispatcher):
        self.db = db
        self.dispatcher = dispatcher
        self.repo = StaffRepository()
        self.specialty_repo = SpecialtyRepository()

    def get_staff_members(self, active_only: bool = False) -> list[StaffMember]:
        return self.repo.get_staff_members(self.db, active_only)

    def get_staff_member(self, staff_member_id: int) -> StaffMember:
        staff_member = self.repo.get_staff_member_by_id(self.db, staff_member_id)
        if not staff_member:
            raise NotFoundError("Staff member not found")
        return staff_member

    async def create_staff_member(self, data: StaffMemberCreate, user: User) -> Optional[StaffMember]:
        """Register a staff member"""
        logger.info(f"📥 Creating staff member for user_id: {user.id}")

        staff_member = self.repo.create_staff_member(
            self.db,
            user.id,
            name=data.name,
            phone=data.phone,
            email=data.email,
            address=data.address,
            city=data.city,
            postal_code=data.postal_code,
            active=True,
        )
        if staff_member is None:
            return None

        create_audit_log(
            self.db,
            user,
            "create",
            "staff_members",
            staff_member.id,
            description=f"Diarista {staff_member.name} cadastrada",
            new_data=snapshot(staff_member),
        )

        await run_post_commit_hooks(
            self.post_create_hooks,
            WorkflowEvent(db=self.db, dispatcher=self.dispatcher, actor=user, staff_member=staff_member),
        )
        return staff_member

    def update_staff_member(self, staff_member_id: int, data: StaffMemberUpdate, user: User) -> StaffMember:
        staff_member = self.get_staff_member(staff_member_id)
        old_data = snapshot(staff_member)

        updates = data.model_dump(exclude_unset=True)
        reject_nulls(updates, ("name", "phone", "active"))
        staff_member = self.repo.update_staff_member(self.db, staff_member, **updates)

        if data.active is False:
            logger.info(f"⏸️ Staff member {staff_member_id} deactivated by user {user.id}")

        create_audit_log(
            self.db,
            user,
            "update",
            "staff_members",
            staff_member_id,
            description=f"Diarista {staff_member.name} atualizada",
            old_data=old_data,
            new_data=snapshot(staff_member),
        )
        return staff_member

    def delete_staff_member(self, staff_member_id: int, user: User) -> dict:
        """Hard delete; staff members with bookings must be deactivated instead"""
        staff_member = self.get_staff_member(staff_member_id)

        if self.repo.count_bookings(self.db, staff_member_id):
            raise ValidationError("Staff member has bookings; deactivate instead of deleting")

        old_data = snapshot(staff_member)
        self.repo.delete_staff_member(self.db, staff_member)
        create_audit_log(
            self.db,
            user,
            "delete",
            "staff_members",
            staff_member_id,
            description=f"Diarista {old_data['name']} removida",
            old_data=old_data,
        )
        return {"message": "Staff member deleted"}

    # Specialty links
    def get_specialties(self, staff_member_id: int) -> list[StaffSpecialty]:
        self.get_staff_member(staff_member_id)
        return self.repo.get_specialty_links(self.db, staff_member_id)

    def add_specialty(self, staff_member_id: int, specialty_id: int) -> StaffSpecialty:
        self.get_staff_member(staff_member_id)
        if not self.specialty_repo.get_specialty_by_id(self.db, specialty_id):
            raise NotFoundError("Specialty not found")

        existing = self.repo.get_specialty_link(self.db, staff_member_id, specialty_id)
        if existing:
            return existing
        return self.repo.add_specialty_link(self.db, staff_member_id, specialty_id)

    def remove_specialty(self, staff_member_id: int, specialty_id: int) -> dict:
        link = self.repo.get_specialty_link(self.db, staff_member_id, specialty_id)
        if not link:
            raise NotFoundError("Specialty is not linked to this staff member")
        self.repo.remove_specialty_link(self.db, link)
        return {"message": "Specialty removed"}
