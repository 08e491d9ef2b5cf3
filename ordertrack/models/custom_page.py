"""
Custom page model — a named dashboard view over a chosen set of columns.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, ForeignKey, String

from ordertrack.db.base import Base
from ordertrack.models.user import new_id


class CustomPage(Base):
    __tablename__ = "custom_pages"

    id: str = Column(String(36), primary_key=True, default=new_id)  # type: ignore[assignment]
    name: str = Column(String(200), unique=True, nullable=False)  # type: ignore[assignment]
    columns: list[str] = Column(JSON, nullable=False)  # type: ignore[assignment]
    created_by: str = Column(String(36), ForeignKey("users.id"), nullable=False)  # type: ignore[assignment]
    created_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )
