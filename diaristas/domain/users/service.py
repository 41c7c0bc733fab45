"""User service - Account listing and role management"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...access import ensure_admin
from ...exceptions import NotFoundError, ValidationError
from ...models import User
from ...services.audit import create_audit_log
from .repository import UserRepository

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, db: Optional[Session]):
        self.db = db
        self.repo = UserRepository()

    def get_users(self, actor: User) -> list[User]:
        ensure_admin(actor)
        return self.repo.get_users(self.db)

    def update_role(self, user_id: int, role: str, actor: User) -> User:
        """
        Promote or demote a user.

        Raises:
            AuthorizationError: If the actor is not an admin
            ValidationError: If an admin tries to demote themselves
            NotFoundError: If the user does not exist
        """
        ensure_admin(actor)

        if user_id == actor.id and role != "admin":
            raise ValidationError("Admins cannot remove their own admin role")

        user = self.repo.get_user_by_id(self.db, user_id)
        if not user:
            raise NotFoundError("User not found")

        old_role = user.role
        if old_role == role:
            return user

        user = self.repo.update_role(self.db, user, role)
        logger.info(f"🔑 User {user_id} role changed from {old_role} to {role} by admin {actor.id}")

        create_audit_log(
            self.db,
            actor,
            "role_change",
            "users",
            user_id,
            description=f"Papel de {user.name or user.open_id} alterado para {role}",
            old_data={"role": old_role},
            new_data={"role": role},
        )
        return user
