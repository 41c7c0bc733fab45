"""Specialty repository - Database operations for specialties"""

from typing import Optional

from sqlalchemy.orm import Session

from ...database import degrade_when_unavailable
from ...models import Specialty


class SpecialtyRepository:
    """Repository for specialty database operations"""

    @staticmethod
    @degrade_when_unavailable([])
    def get_specialties(db: Session) -> list[Specialty]:
        return db.query(Specialty).order_by(Specialty.name).all()

    @staticmethod
    @degrade_when_unavailable()
    def get_specialty_by_id(db: Session, specialty_id: int) -> Optional[Specialty]:
        return db.query(Specialty).filter(Specialty.id == specialty_id).first()

    @staticmethod
    @degrade_when_unavailable()
    def get_specialty_by_name(db: Session, name: str) -> Optional[Specialty]:
        return db.query(Specialty).filter(Specialty.name == name).first()

    @staticmethod
    @degrade_when_unavailable()
    def create_specialty(db: Session, **specialty_data) -> Specialty:
        specialty = Specialty(**specialty_data)
        db.add(specialty)
        db.commit()
        db.refresh(specialty)
        return specialty
