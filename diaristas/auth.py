import logging
from datetime import datetime
from typing import Optional

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from .access import ensure_admin
from .config import OWNER_OPEN_ID
from .database import get_db
from .models import User
from .security_utils import verify_jwt_token

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def _role_for(open_id: str) -> str:
    return "admin" if OWNER_OPEN_ID and open_id == OWNER_OPEN_ID else "user"


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Optional[Session] = Depends(get_db),
) -> User:
    """Get current user from the session token, creating the account on first sign-in"""

    if not credentials:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated. Please provide a valid Bearer token in the Authorization header.",
        )

    claims = verify_jwt_token(credentials.credentials)
    if not claims:
        raise HTTPException(status_code=401, detail="Invalid or expired session token")

    open_id = claims.get("sub")
    if not open_id:
        logger.error(f"❌ Token missing subject claim. Available claims: {list(claims.keys())}")
        raise HTTPException(status_code=401, detail="Invalid token claims")

    name = claims.get("name")
    email = claims.get("email")

    if db is None:
        # Degraded mode: an unsaved account lets read endpoints answer with empty results
        logger.warning("⚠️ Authenticating without a database: using a transient user")
        return User(id=0, open_id=open_id, name=name, email=email, role=_role_for(open_id))

    user = db.query(User).filter(User.open_id == open_id).first()

    if not user:
        logger.info(f"🆕 Creating new user: {open_id}")
        user = User(
            open_id=open_id,
            name=name,
            email=email,
            login_method=claims.get("login_method"),
            role=_role_for(open_id),
            last_signed_in=datetime.now(),
        )
        db.add(user)
        try:
            db.commit()
            db.refresh(user)
        except Exception as e:
            db.rollback()
            logger.error(f"❌ Failed to create user {open_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to create user") from e
        return user

    updated = False
    if name and user.name != name:
        user.name = name
        updated = True
    if email and user.email != email:
        user.email = email
        updated = True
    if updated:
        db.commit()
        db.refresh(user)

    return user


async def get_current_admin(user: User = Depends(get_current_user)) -> User:
    """Current user, rejected with 403 unless they are an admin"""
    ensure_admin(user)
    return user
