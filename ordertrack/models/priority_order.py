"""
Priority list — the single, shared ordering of orders planners push to
the top of the dashboard.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String

from ordertrack.db.base import Base


class PriorityOrder(Base):
    __tablename__ = "priority_orders"

    id: int = Column(Integer, primary_key=True, index=True)  # type: ignore[assignment]
    # Order ids in display order
    order_ids: list[str] = Column(JSON, nullable=False, default=list)  # type: ignore[assignment]
    updated_by: str = Column(String(36), ForeignKey("users.id"), nullable=False)  # type: ignore[assignment]
    updated_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
