"""Pydantic schemas for the priority list."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, Field

from ordertrack.schemas.order import OrderRead


class PriorityOrderUpdate(BaseModel):
    # Shape is checked by the endpoint so a bad payload is a 400, not a 422
    order_ids: Any = Field(default=None, validation_alias=AliasChoices("orderIds", "order_ids"))


class PriorityOrderRead(BaseModel):
    id: int | None = None
    order_ids: list[str] = []
    updated_by: str | None = None
    updated_at: datetime | None = None
    orders: list[OrderRead] = []
