"""User router - Current user and role management endpoints"""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from .schemas import RoleUpdate, UserResponse
from .service import UserService

router = APIRouter(prefix="/users", tags=["Users"])


def get_user_service(db: Optional[Session] = Depends(get_db)) -> UserService:
    """Dependency injection for UserService"""
    return UserService(db)


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_user)):
    """Get the signed-in user"""
    return current_user


@router.get("", response_model=list[UserResponse])
async def get_users(
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    """List every account (admin only)"""
    return service.get_users(current_user)


@router.patch("/{user_id}/role", response_model=UserResponse)
async def update_user_role(
    user_id: int,
    data: RoleUpdate,
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    """Promote or demote a user (admin only)"""
    return service.update_role(user_id, data.role, current_user)
