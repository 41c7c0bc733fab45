"""User repository - Database operations for user accounts"""

from typing import Optional

from sqlalchemy.orm import Session

from ...database import degrade_when_unavailable
from ...models import User


class UserRepository:
    @staticmethod
    @degrade_when_unavailable([])
    def get_users(db: Session) -> list[User]:
        return db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()

    @staticmethod
    @degrade_when_unavailable()
    def get_user_by_id(db: Session, user_id: int) -> Optional[User]:
        return db.query(User).filter(User.id == user_id).first()

    @staticmethod
    @degrade_when_unavailable()
    def update_role(db: Session, user: User, role: str) -> User:
        user.role = role
        db.commit()
        db.refresh(user)
        return user
