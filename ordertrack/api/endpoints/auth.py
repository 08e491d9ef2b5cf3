"""
Auth endpoints — login, logout, guest mode and session inspection.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Request, Response
from slowapi import Limiter
from slowapi.util import get_remote_address
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ordertrack.api.deps import (SESSION_COOKIE, get_current_user, get_db,
                                 get_optional_identity)
from ordertrack.core.config import settings
from ordertrack.core.exceptions import InvalidRequest, Unauthorized
from ordertrack.core.security import create_session_token, verify_password
from ordertrack.models.user import User
from ordertrack.schemas.token import (AuthCheckResponse, GuestResponse,
                                      GuestSession, Identity, LoginRequest,
                                      SuccessResponse)
from ordertrack.schemas.user import LoginResponse, UserRead

# Rate limiter, keyed by client IP
limiter = Limiter(key_func=get_remote_address)

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

GUEST_COOKIE = "guest_mode"
LOGOUT_FLOW_HEADER = "x-logout-flow"

# Session and CSRF cookies written by this service or the web frontend
LOGOUT_COOKIES = (
    SESSION_COOKIE,
    "next-auth.session-token",
    "next-auth.csrf-token",
    "next-auth.callback-url",
    "__Secure-next-auth.session-token",
    "__Secure-next-auth.csrf-token",
)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _auth_cookie_names(request: Request) -> list[str]:
    return sorted(
        name
        for name in request.cookies
        if name == SESSION_COOKIE or name.startswith(("next-auth", "__Secure"))
    )


@router.post("/login", response_model=LoginResponse)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
async def login(
    request: Request,
    response: Response,
    body: LoginRequest,
    db: AsyncSession = Depends(get_db),
) -> LoginResponse:
    """Authenticate with email/password and set the HttpOnly session cookie."""
    if not body.email or not body.password:
        raise InvalidRequest("Email and password are required")
    if not _EMAIL_RE.match(body.email):
        raise InvalidRequest("Invalid email format")

    result = await db.execute(select(User).where(User.email == body.email))
    user = result.scalar_one_or_none()

    if user is None or not verify_password(body.password, user.hashed_password):
        logger.warning("Failed login for %s", body.email)
        raise Unauthorized("Invalid email or password")

    identity = Identity(user_id=user.id, email=user.email, role=user.role)
    session_token = create_session_token(identity)

    response.set_cookie(
        key=SESSION_COOKIE,
        value=session_token,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
        max_age=settings.SESSION_EXPIRE_HOURS * 60 * 60,
        path="/",
    )
    logger.info("Login successful for %s (%s)", user.email, user.role.value)
    return LoginResponse(user=UserRead.model_validate(user))


@router.post("/logout", response_model=SuccessResponse)
async def logout(response: Response) -> SuccessResponse:
    """Expire every auth cookie.  Succeeds whether or not they were set."""
    for name in LOGOUT_COOKIES:
        response.set_cookie(
            key=name,
            value="",
            expires=_EPOCH,
            max_age=0,
            path="/",
            httponly=True,
            secure=settings.COOKIE_SECURE or name.startswith("__Secure-"),
            samesite="lax",
        )
    # Lets edge middleware tell a logout apart from an expired session
    response.headers[LOGOUT_FLOW_HEADER] = "true"
    logger.info("Auth cookies cleared")
    return SuccessResponse()


# ── Guest mode ──────────────────────────────────────────────────────
@router.api_route("/guest", methods=["GET", "POST"], response_model=GuestResponse)
async def enable_guest_mode(response: Response) -> GuestResponse:
    max_age = settings.GUEST_MODE_HOURS * 60 * 60
    response.set_cookie(
        key=GUEST_COOKIE,
        value="true",
        max_age=max_age,
        path="/",
        secure=settings.COOKIE_SECURE,
        samesite="lax",
    )
    expires = datetime.now(timezone.utc) + timedelta(seconds=max_age)
    return GuestResponse(guest_session=GuestSession(expires=expires))


@router.delete("/guest", response_model=SuccessResponse)
async def disable_guest_mode(response: Response) -> SuccessResponse:
    response.set_cookie(
        key=GUEST_COOKIE,
        value="",
        max_age=0,
        path="/",
        secure=settings.COOKIE_SECURE,
        samesite="lax",
    )
    return SuccessResponse()


# ── Session inspection ──────────────────────────────────────────────
@router.get("/check", response_model=AuthCheckResponse)
async def check_auth(
    request: Request,
    identity: Optional[Identity] = Depends(get_optional_identity),
) -> AuthCheckResponse:
    """Report authentication status; never fails for anonymous callers."""
    return AuthCheckResponse(
        authenticated=identity is not None,
        identity=identity,
        guest_mode=request.cookies.get(GUEST_COOKIE) == "true",
        cookies=_auth_cookie_names(request),
        server_time=datetime.now(timezone.utc),
    )


@router.get("/me", response_model=UserRead)
async def read_current_user(
    current_user: User = Depends(get_current_user),
) -> User:
    """Return profile of the currently authenticated user."""
    return current_user
