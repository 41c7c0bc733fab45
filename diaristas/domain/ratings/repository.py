"""Rating repository - Database operations for ratings"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ...database import degrade_when_unavailable
from ...models import Rating


class RatingRepository:
    """Repository for rating database operations"""

    @staticmethod
    @degrade_when_unavailable([])
    def get_ratings_for_staff(db: Session, staff_member_id: int) -> list[Rating]:
        return (
            db.query(Rating)
            .filter(Rating.staff_member_id == staff_member_id)
            .order_by(Rating.created_at.desc(), Rating.id.desc())
            .all()
        )

    @staticmethod
    @degrade_when_unavailable()
    def get_rating_by_id(db: Session, rating_id: int) -> Optional[Rating]:
        return db.query(Rating).filter(Rating.id == rating_id).first()

    @staticmethod
    @degrade_when_unavailable((0.0, 0))
    def get_average_for_staff(db: Session, staff_member_id: int) -> tuple[float, int]:
        """Average score and number of ratings (0.0 when there are none)"""
        average, count = (
            db.query(func.avg(Rating.score), func.count(Rating.id))
            .filter(Rating.staff_member_id == staff_member_id)
            .one()
        )
        return float(average or 0), count

    @staticmethod
    @degrade_when_unavailable()
    def create_rating(db: Session, user_id: int, **rating_data) -> Rating:
        rating = Rating(user_id=user_id, **rating_data)
        db.add(rating)
        db.commit()
        db.refresh(rating)
        return rating

    @staticmethod
    @degrade_when_unavailable()
    def update_rating(db: Session, rating: Rating, **updates) -> Rating:
        for key, value in updates.items():
            if hasattr(rating, key):
                setattr(rating, key, value)

        db.commit()
        db.refresh(rating)
        return rating
