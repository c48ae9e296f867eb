"""
Access token verification.

Sign-in happens at the external identity provider; this service only checks the
bearer token it issued (HS256, shared secret) and looks the subject up in
``user_roles``.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Optional, Set

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from charter.core.config import settings
from charter.core.database import get_db
from charter.core.exceptions import AuthenticationError
from charter.models.user import AppRole, UserRoleAssignment

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass
class CurrentUser:
    id: str
    roles: Set[AppRole] = field(default_factory=set)

    @property
    def is_admin(self) -> bool:
        return AppRole.ADMIN in self.roles


def create_access_token(subject: str, expires_delta: Optional[timedelta] = None) -> str:
    """Issue a token the way the identity provider does; used by tooling and tests."""
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    return jwt.encode(
        {"sub": subject, "exp": expire}, settings.SECRET_KEY, algorithm=settings.ALGORITHM
    )


def decode_access_token(token: str) -> str:
    """Return the token subject, or raise AuthenticationError."""
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            options={"verify_aud": False},
        )
    except JWTError as exc:
        raise AuthenticationError("Invalid access token") from exc

    subject = payload.get("sub")
    if not subject:
        raise AuthenticationError("Access token has no subject")
    return subject


async def load_roles(db: AsyncSession, user_id: str) -> Set[AppRole]:
    result = await db.execute(
        select(UserRoleAssignment.role).where(UserRoleAssignment.user_id == user_id)
    )
    return set(result.scalars().all())


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> Optional[CurrentUser]:
    if credentials is None:
        return None
    user_id = decode_access_token(credentials.credentials)
    return CurrentUser(id=user_id, roles=await load_roles(db, user_id))


async def get_current_user(
    user: Optional[CurrentUser] = Depends(get_optional_user),
) -> CurrentUser:
    if user is None:
        raise AuthenticationError()
    return user
