"""Pydantic schemas for notifications."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, Field


class NotificationRead(BaseModel):
    id: int
    message: str
    order_id: str
    user_id: str
    read: bool
    created_at: datetime | None
    verkoop_order: str | None = None  # joined from orders table

    model_config = {"from_attributes": True}


class NotificationUpdate(BaseModel):
    read: bool = True


class BulkDeleteRequest(BaseModel):
    ids: list[int] = Field(min_length=1, max_length=500)


class BulkDeleteResponse(BaseModel):
    success: bool = True
    deleted: int


class NotificationCreate(BaseModel):
    order_id: str = Field(validation_alias=AliasChoices("orderId", "order_id"))
    field: str
    value: Any = None


class NotificationCreated(BaseModel):
    success: bool = True
    notifications: list[NotificationRead]
