"""Role checks shared by the routers and services"""

import logging

from .exceptions import AuthorizationError
from .models import User

logger = logging.getLogger(__name__)


def can_list_all(role: str) -> bool:
    """Admins see every coordinator's records, everyone else only their own"""
    return role == "admin"


def ensure_admin(user: User) -> None:
    if not can_list_all(user.role):
        logger.warning(f"🚫 Access denied: user {user.id} ({user.role}) attempted an admin operation")
        raise AuthorizationError("Admin access required")
