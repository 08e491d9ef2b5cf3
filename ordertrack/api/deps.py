"""
FastAPI dependencies — session resolution, role guards and database session.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Optional

from fastapi import Cookie, Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ordertrack.core.exceptions import NotFound, Unauthorized
from ordertrack.core.security import decode_bearer_token, decode_session_token
from ordertrack.db.session import async_session_factory
from ordertrack.models.user import User
from ordertrack.schemas.token import Identity

SESSION_COOKIE = "token"

# auto_error=False so we can fall back to the session cookie
bearer_scheme = HTTPBearer(auto_error=False)


# ── Database session ────────────────────────────────────────────────
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with async_session_factory() as session:
        try:
            yield session
        finally:
            await session.close()


# ── Auth dependencies ───────────────────────────────────────────────
def resolve_identity(header_token: str | None, cookie_token: str | None) -> Identity | None:
    """Identity from an Authorization header or the session cookie.

    Header wins.  A header may carry either a session token or a bearer
    token issued by ``/get-token``.
    """
    if header_token:
        return decode_session_token(header_token) or decode_bearer_token(header_token)
    if cookie_token:
        return decode_session_token(cookie_token)
    return None


async def get_optional_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    token: Optional[str] = Cookie(default=None),
) -> Identity | None:
    header_token = credentials.credentials if credentials else None
    return resolve_identity(header_token, token)


async def get_current_identity(
    identity: Identity | None = Depends(get_optional_identity),
) -> Identity:
    """Reject requests without a valid session."""
    if identity is None:
        raise Unauthorized()
    return identity


async def get_current_user(
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Look up the session's user record; 404 if it has been removed."""
    result = await db.execute(select(User).where(User.email == identity.email))
    user = result.scalar_one_or_none()
    if user is None:
        raise NotFound("User not found")
    return user
