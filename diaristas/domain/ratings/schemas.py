"""Rating domain schemas"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from ...shared.schemas import CamelModel


class RatingCreate(CamelModel):
    staff_member_id: int
    booking_id: int
    score: int = Field(ge=1, le=5)
    comment: Optional[str] = None


class RatingUpdate(CamelModel):
    score: Optional[int] = Field(default=None, ge=1, le=5)
    comment: Optional[str] = None


class RatingResponse(CamelModel):
    id: int
    user_id: int
    staff_member_id: int
    booking_id: int
    score: int
    comment: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class RatingAverageResponse(CamelModel):
    staff_member_id: int
    average: float
    count: int
