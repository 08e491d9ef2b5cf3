"""Pydantic schemas for persisted column permissions."""

from __future__ import annotations

from pydantic import BaseModel, Field

from ordertrack.models.user import Role


class ColumnPermissionRead(BaseModel):
    role: Role
    column: str
    can_edit: bool = Field(alias="canEdit")
    can_view: bool = Field(alias="canView")

    model_config = {"from_attributes": True, "populate_by_name": True}
