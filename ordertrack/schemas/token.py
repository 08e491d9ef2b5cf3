"""Pydantic schemas for sessions, bearer tokens and the caller identity."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from ordertrack.models.user import Role


class Identity(BaseModel):
    """Validated claims of the authenticated caller."""

    user_id: str = Field(alias="userId")
    email: str
    role: Role

    model_config = {"populate_by_name": True, "frozen": True}

    def claims(self) -> dict[str, str]:
        return {"userId": self.user_id, "email": self.email, "role": self.role.value}


class TokenResponse(BaseModel):
    token: str


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def _normalise_email(cls, v: str) -> str:
        return v.strip().lower()


class GuestSession(BaseModel):
    role: Role = Role.GUEST
    name: str = "Guest"
    expires: datetime


class GuestResponse(BaseModel):
    success: bool = True
    guest_session: GuestSession = Field(serialization_alias="guestSession")


class SuccessResponse(BaseModel):
    success: bool = True


class AuthCheckResponse(BaseModel):
    authenticated: bool
    identity: Identity | None = None
    guest_mode: bool = False
    cookies: list[str] = []
    server_time: datetime
