"""Pydantic schemas for users."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from ordertrack.models.user import Role


class UserRead(BaseModel):
    id: str
    email: str
    name: str | None
    role: Role
    created_at: datetime | None = None

    model_config = {"from_attributes": True}


class LoginResponse(BaseModel):
    success: bool = True
    user: UserRead
