"""Booking domain schemas - Pydantic models for validation"""

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import Field

from ...shared.schemas import CamelModel

BookingStatus = Literal["scheduled", "completed", "canceled"]


class BookingCreate(CamelModel):
    """Schema for creating a booking; amounts are in cents"""

    staff_member_id: int
    specialty_id: int
    service_address: str
    start_date: date
    end_date: date
    daily_rate: int = Field(ge=0)
    total_price: Optional[int] = Field(default=None, ge=0)  # Recomputed server-side
    description: Optional[str] = None
    notes: Optional[str] = None


class BookingUpdate(CamelModel):
    """Schema for updating a booking (field edits and status transitions)"""

    staff_member_id: Optional[int] = None
    specialty_id: Optional[int] = None
    service_address: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    daily_rate: Optional[int] = Field(default=None, ge=0)
    description: Optional[str] = None
    notes: Optional[str] = None
    status: Optional[BookingStatus] = None


class BookingResponse(CamelModel):
    id: int
    user_id: int
    staff_member_id: int
    staff_name: Optional[str] = None
    specialty_id: int
    specialty_name: Optional[str] = None
    service_address: str
    start_date: date
    end_date: date
    description: Optional[str] = None
    status: BookingStatus
    daily_rate: int
    total_price: Optional[int] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
