"""Specialty router"""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from .schemas import SpecialtyCreate, SpecialtyResponse
from .service import SpecialtyService

router = APIRouter(prefix="/specialties", tags=["Specialties"])


def get_specialty_service(db: Optional[Session] = Depends(get_db)) -> SpecialtyService:
    """Dependency injection for SpecialtyService"""
    return SpecialtyService(db)


@router.get("", response_model=list[SpecialtyResponse])
async def get_specialties(
    current_user: User = Depends(get_current_user),
    service: SpecialtyService = Depends(get_specialty_service),
):
    return service.get_specialties()


@router.get("/{specialty_id}", response_model=SpecialtyResponse)
async def get_specialty(
    specialty_id: int,
    current_user: User = Depends(get_current_user),
    service: SpecialtyService = Depends(get_specialty_service),
):
    return service.get_specialty(specialty_id)


@router.post("", response_model=Optional[SpecialtyResponse])
async def create_specialty(
    data: SpecialtyCreate,
    current_user: User = Depends(get_current_user),
    service: SpecialtyService = Depends(get_specialty_service),
):
    """Create a specialty (names are unique)"""
    return service.create_specialty(data)
