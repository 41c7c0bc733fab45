"""Specialty service"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...exceptions import NotFoundError, ValidationError
from ...models import Specialty
from .repository import SpecialtyRepository
from .schemas import SpecialtyCreate

logger = logging.getLogger(__name__)


class SpecialtyService:
    def __init__(self, db: Optional[Session]):
        self.db = db
        self.repo = SpecialtyRepository()

    def get_specialties(self) -> list[Specialty]:
        return self.repo.get_specialties(self.db)

    def get_specialty(self, specialty_id: int) -> Specialty:
        specialty = self.repo.get_specialty_by_id(self.db, specialty_id)
        if not specialty:
            raise NotFoundError("Specialty not found")
        return specialty

    def create_specialty(self, data: SpecialtyCreate) -> Optional[Specialty]:
        if self.repo.get_specialty_by_name(self.db, data.name):
            raise ValidationError(f"Specialty '{data.name}' already exists")

        specialty = self.repo.create_specialty(self.db, name=data.name, description=data.description)
        if specialty:
            logger.info(f"✅ Specialty created: {specialty.name}")
        return specialty
