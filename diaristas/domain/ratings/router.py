"""Rating router"""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from ...services.notification_service import NotificationDispatcher, get_dispatcher
from .schemas import RatingAverageResponse, RatingCreate, RatingResponse, RatingUpdate
from .service import RatingService

router = APIRouter(prefix="/ratings", tags=["Ratings"])


def get_rating_service(
    db: Optional[Session] = Depends(get_db),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
) -> RatingService:
    return RatingService(db, dispatcher)


@router.get("/staff/{staff_member_id}", response_model=list[RatingResponse])
async def get_staff_ratings(
    staff_member_id: int,
    current_user: User = Depends(get_current_user),
    service: RatingService = Depends(get_rating_service),
):
    return service.get_ratings_for_staff(staff_member_id)


@router.get("/staff/{staff_member_id}/average", response_model=RatingAverageResponse)
async def get_staff_average(
    staff_member_id: int,
    current_user: User = Depends(get_current_user),
    service: RatingService = Depends(get_rating_service),
):
    """Average score of a staff member (0 when never rated)"""
    return service.get_average(staff_member_id)


@router.post("", response_model=Optional[RatingResponse])
async def create_rating(
    data: RatingCreate,
    current_user: User = Depends(get_current_user),
    service: RatingService = Depends(get_rating_service),
):
    return await service.create_rating(data, current_user)


@router.patch("/{rating_id}", response_model=RatingResponse)
async def update_rating(
    rating_id: int,
    data: RatingUpdate,
    current_user: User = Depends(get_current_user),
    service: RatingService = Depends(get_rating_service),
):
    return service.update_rating(rating_id, data, current_user)
