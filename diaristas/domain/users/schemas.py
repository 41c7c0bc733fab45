"""User domain schemas"""

from datetime import datetime
from typing import Literal, Optional

from ...shared.schemas import CamelModel

UserRole = Literal["user", "admin"]


class UserResponse(CamelModel):
    id: int
    open_id: str
    name: Optional[str] = None
    email: Optional[str] = None
    login_method: Optional[str] = None
    role: UserRole
    created_at: Optional[datetime] = None
    last_signed_in: Optional[datetime] = None


class RoleUpdate(CamelModel):
    role: UserRole
