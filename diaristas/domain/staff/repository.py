"""Staff repository - Database operations for staff members"""

from typing import Optional

from sqlalchemy.orm import Session

from ...database import degrade_when_unavailable
from ...models import Booking, StaffMember, StaffSpecialty


class StaffRepository:
    """Repository for staff member database operations"""

    @staticmethod
    @degrade_when_unavailable([])
    def get_staff_members(db: Session, active_only: bool = False) -> list[StaffMember]:
        """Get all staff members (shared by every coordinator)"""
        query = db.query(StaffMember)
        if active_only:
            query = query.filter(StaffMember.active.is_(True))
        return query.order_by(StaffMember.name).all()

    @staticmethod
    @degrade_when_unavailable()
    def get_staff_member_by_id(db: Session, staff_member_id: int) -> Optional[StaffMember]:
        return db.query(StaffMember).filter(StaffMember.id == staff_member_id).first()

    @staticmethod
    @degrade_when_unavailable()
    def create_staff_member(db: Session, user_id: int, **staff_data) -> StaffMember:
        staff_member = StaffMember(user_id=user_id, **staff_data)
        db.add(staff_member)
        db.commit()
        db.refresh(staff_member)
        return staff_member

    @staticmethod
    @degrade_when_unavailable()
    def update_staff_member(db: Session, staff_member: StaffMember, **updates) -> StaffMember:
        for key, value in updates.items():
            if hasattr(staff_member, key):
                setattr(staff_member, key, value)

        db.commit()
        db.refresh(staff_member)
        return staff_member

    @staticmethod
    @degrade_when_unavailable()
    def delete_staff_member(db: Session, staff_member: StaffMember) -> None:
        db.delete(staff_member)
        db.commit()

    @staticmethod
    @degrade_when_unavailable(0)
    def count_bookings(db: Session, staff_member_id: int) -> int:
        return db.query(Booking).filter(Booking.staff_member_id == staff_member_id).count()

    # Specialty links
    @staticmethod
    @degrade_when_unavailable([])
    def get_specialty_links(db: Session, staff_member_id: int) -> list[StaffSpecialty]:
        return (
            db.query(StaffSpecialty)
            .filter(StaffSpecialty.staff_member_id == staff_member_id)
            .order_by(StaffSpecialty.id)
            .all()
        )

    @staticmethod
    @degrade_when_unavailable()
    def get_specialty_link(db: Session, staff_member_id: int, specialty_id: int) -> Optional[StaffSpecialty]:
        return (
            db.query(StaffSpecialty)
            .filter(
                StaffSpecialty.staff_member_id == staff_member_id,
                StaffSpecialty.specialty_id == specialty_id,
            )
            .first()
        )

    @staticmethod
    @degrade_when_unavailable()
    def add_specialty_link(db: Session, staff_member_id: int, specialty_id: int) -> StaffSpecialty:
        link = StaffSpecialty(staff_member_id=staff_member_id, specialty_id=specialty_id)
        db.add(link)
        db.commit()
        db.refresh(link)
        return link

    @staticmethod
    @degrade_when_unavailable()
    def remove_specialty_link(db: Session, link: StaffSpecialty) -> None:
        db.delete(link)
        db.commit()
