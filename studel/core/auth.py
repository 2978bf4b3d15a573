"""
Authentication boundary for the ordering service.

Credentials are verified by the external identity provider, which issues
HS256 bearer tokens whose ``sub`` claim is the user id. This module only
validates the token signature, loads the user's profile and hands the
services an explicit ``Actor``; no service reads ambient session state.
"""
import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from pydantic import BaseModel

from studel.core.config import JWT_SECRET_KEY, JWT_ALGORITHM, ACCESS_TOKEN_EXPIRE_MINUTES
from studel.models.user import Role, User

log = logging.getLogger(__name__)

# Security scheme for JWT bearer tokens
security = HTTPBearer(auto_error=False)


class Actor(BaseModel):
    """The acting user, passed explicitly into every service call."""
    id: uuid.UUID
    name: str
    role: Role
    is_approved: bool = True
    vendor_id: Optional[uuid.UUID] = None

    @classmethod
    def from_user(cls, user: User) -> "Actor":
        return cls(
            id=user.id,
            name=user.name,
            role=user.role,
            is_approved=user.is_approved,
            vendor_id=user.vendor_id,
        )


def create_access_token(user_id: uuid.UUID, expires_minutes: int = ACCESS_TOKEN_EXPIRE_MINUTES) -> str:
    """
    Issues a token in the identity provider's format. Used by the seed script
    and tests; production tokens come from the provider itself.
    """
    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes)
    return jwt.encode({"sub": str(user_id), "exp": expire}, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)


async def get_current_actor(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Actor:
    """
    FastAPI dependency resolving the bearer token to an Actor.

    Raises:
        HTTPException: 401 if the token is missing, invalid, expired, or
        names a user that no longer exists
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None:
        raise credentials_exception

    try:
        payload = jwt.decode(credentials.credentials, JWT_SECRET_KEY, algorithms=[JWT_ALGORITHM])
        user_id = uuid.UUID(payload.get("sub") or "")
    except (JWTError, ValueError) as e:
        log.warning(f"JWT validation error: {e}")
        raise credentials_exception

    user = await User.get_or_none(id=user_id)
    if user is None:
        log.warning(f"Token subject {user_id} has no user profile")
        raise credentials_exception
    return Actor.from_user(user)
