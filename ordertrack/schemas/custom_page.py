"""Pydantic schemas for custom dashboard pages."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class CustomPageCreate(BaseModel):
    name: str = ""
    columns: list[str] = []


class CustomPageDelete(BaseModel):
    id: str | None = None


class CustomPageRead(BaseModel):
    id: str
    name: str
    columns: list[str]
    created_by: str
    created_at: datetime | None = None

    model_config = {"from_attributes": True}
