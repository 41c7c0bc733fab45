"""Staff router - FastAPI endpoints for staff member operations"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from ...services.notification_service import NotificationDispatcher, get_dispatcher
from ...shared.schemas import MessageResponse
from .schemas import (
    StaffMemberCreate,
    StaffMemberResponse,
    StaffMemberUpdate,
    StaffSpecialtyRequest,
    StaffSpecialtyResponse,
)
from .service import StaffService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/staff", tags=["Staff"])


def get_staff_service(
    db: Optional[Session] = Depends(get_db),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
) -> StaffService:
    """Dependency injection for StaffService"""
    return StaffService(db, dispatcher)


# ============================================================================
# CORE CRUD OPERATIONS
# ============================================================================


@router.get("", response_model=list[StaffMemberResponse])
async def get_staff_members(
    active_only: bool = Query(False, alias="activeOnly"),
    current_user: User = Depends(get_current_user),
    service: StaffService = Depends(get_staff_service),
):
    """Get all staff members"""
    return service.get_staff_members(active_only)


@router.get("/{staff_member_id}", response_model=StaffMemberResponse)
async def get_staff_member(
    staff_member_id: int,
    current_user: User = Depends(get_current_user),
    service: StaffService = Depends(get_staff_service),
):
    return service.get_staff_member(staff_member_id)


@router.post("", response_model=Optional[StaffMemberResponse])
async def create_staff_member(
    data: StaffMemberCreate,
    current_user: User = Depends(get_current_user),
    service: StaffService = Depends(get_staff_service),
):
    """Register a new staff member"""
    return await service.create_staff_member(data, current_user)


@router.patch("/{staff_member_id}", response_model=StaffMemberResponse)
async def update_staff_member(
    staff_member_id: int,
    data: StaffMemberUpdate,
    current_user: User = Depends(get_current_user),
    service: StaffService = Depends(get_staff_service),
):
    """Update a staff member (send active=false to deactivate)"""
    return service.update_staff_member(staff_member_id, data, current_user)


@router.delete("/{staff_member_id}", response_model=MessageResponse)
async def delete_staff_member(
    staff_member_id: int,
    current_user: User = Depends(get_current_user),
    service: StaffService = Depends(get_staff_service),
):
    """Permanently delete a staff member without bookings"""
    return service.delete_staff_member(staff_member_id, current_user)


# ============================================================================
# SPECIALTIES
# ============================================================================


@router.get("/{staff_member_id}/specialties", response_model=list[StaffSpecialtyResponse])
async def get_staff_specialties(
    staff_member_id: int,
    current_user: User = Depends(get_current_user),
    service: StaffService = Depends(get_staff_service),
):
    return service.get_specialties(staff_member_id)


@router.post("/{staff_member_id}/specialties", response_model=StaffSpecialtyResponse)
async def add_staff_specialty(
    staff_member_id: int,
    data: StaffSpecialtyRequest,
    current_user: User = Depends(get_current_user),
    service: StaffService = Depends(get_staff_service),
):
    return service.add_specialty(staff_member_id, data.specialty_id)


@router.delete("/{staff_member_id}/specialties/{specialty_id}", response_model=MessageResponse)
async def remove_staff_specialty(
    staff_member_id: int,
    specialty_id: int,
    current_user: User = Depends(get_current_user),
    service: StaffService = Depends(get_staff_service),
):
    return service.remove_specialty(staff_member_id, specialty_id)
