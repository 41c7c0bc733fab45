"""Booking router - FastAPI endpoints for booking operations"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from ...services.notification_service import NotificationDispatcher, get_dispatcher
from ...shared.schemas import MessageResponse
from .schemas import BookingCreate, BookingResponse, BookingStatus, BookingUpdate
from .service import BookingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bookings", tags=["Bookings"])


def get_booking_service(
    db: Optional[Session] = Depends(get_db),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
) -> BookingService:
    """Dependency injection for BookingService"""
    return BookingService(db, dispatcher)


@router.get("", response_model=list[BookingResponse])
async def get_bookings(
    status: Optional[BookingStatus] = Query(None),
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    """Get bookings (every booking for admins, own bookings otherwise)"""
    return service.get_bookings(current_user, status)


@router.get("/staff/{staff_member_id}", response_model=list[BookingResponse])
async def get_staff_bookings(
    staff_member_id: int,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    return service.get_bookings_for_staff(staff_member_id, current_user)


@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking(
    booking_id: int,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    return service.get_booking(booking_id, current_user)


@router.post("", response_model=Optional[BookingResponse])
async def create_booking(
    data: BookingCreate,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    """Create a booking; the coordinator and the staff member are notified on WhatsApp"""
    return await service.create_booking(data, current_user)


@router.patch("/{booking_id}", response_model=BookingResponse)
async def update_booking(
    booking_id: int,
    data: BookingUpdate,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    return service.update_booking(booking_id, data, current_user)


@router.post("/{booking_id}/cancel", response_model=BookingResponse)
async def cancel_booking(
    booking_id: int,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    return service.cancel_booking(booking_id, current_user)


@router.post("/{booking_id}/complete", response_model=BookingResponse)
async def complete_booking(
    booking_id: int,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    return service.complete_booking(booking_id, current_user)


@router.delete("/{booking_id}", response_model=MessageResponse)
async def delete_booking(
    booking_id: int,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    """Permanently delete a booking that has no payments, ratings or receipts"""
    return service.delete_booking(booking_id, current_user)
