"""Pydantic schemas for user and admin settings."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class SettingsRead(BaseModel):
    user: dict[str, Any]
    admin: dict[str, Any]


class SettingsUpdate(BaseModel):
    user: dict[str, Any] | None = None
    admin: dict[str, Any] | None = None


class SettingsSaved(BaseModel):
    success: bool = True
    settings: dict[str, Any]
    message: str = "Settings saved successfully"
