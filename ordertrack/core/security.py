"""
JWT session / bearer token creation & verification and password hashing (bcrypt).
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import ValidationError

from ordertrack.core.config import settings
from ordertrack.core.exceptions import ServerConfigurationError
from ordertrack.schemas.token import Identity

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

SESSION_TOKEN_TYPE = "session"


# ── Passwords ───────────────────────────────────────────────────────
def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def get_password_hash(plain: str) -> str:
    return pwd_context.hash(plain)


# ── Sessions ────────────────────────────────────────────────────────
def create_session_token(identity: Identity, expires_delta: timedelta | None = None) -> str:
    secret = settings.session_secret
    if not secret:
        raise ServerConfigurationError("AUTH_SECRET is not configured")
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(hours=settings.SESSION_EXPIRE_HOURS)
    )
    return jwt.encode(
        {**identity.claims(), "exp": expire, "type": SESSION_TOKEN_TYPE},
        secret,
        algorithm=settings.JWT_ALGORITHM,
    )


def _identity_from(payload: dict) -> Identity | None:
    try:
        return Identity.model_validate(payload)
    except ValidationError:
        return None


def decode_session_token(token: str) -> Identity | None:
    """Return the identity if *session* token is valid, else ``None``."""
    secret = settings.session_secret
    if not secret:
        return None
    try:
        payload = jwt.decode(token, secret, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        return None
    if payload.get("type") != SESSION_TOKEN_TYPE:
        return None
    return _identity_from(payload)


# ── Bearer tokens ───────────────────────────────────────────────────
def issue_bearer_token(identity: Identity) -> str:
    """Sign ``{userId, email, role}`` with ``JWT_SECRET``, valid for 24 hours.

    Raises :class:`ServerConfigurationError` rather than issuing a token
    with a missing or fallback key.
    """
    if not settings.JWT_SECRET:
        raise ServerConfigurationError("JWT_SECRET is not configured")
    expire = datetime.now(timezone.utc) + timedelta(hours=settings.BEARER_TOKEN_EXPIRE_HOURS)
    return jwt.encode(
        {**identity.claims(), "exp": expire},
        settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_bearer_token(token: str) -> Identity | None:
    if not settings.JWT_SECRET:
        return None
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        return None
    return _identity_from(payload)
