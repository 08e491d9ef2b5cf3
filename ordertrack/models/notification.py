"""
Notification model — change log entries shown in the planners' panel.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship

from ordertrack.db.base import Base


class Notification(Base):
    __tablename__ = "notifications"
    __table_args__ = (Index("ix_notifications_order_created", "order_id", "created_at"),)

    id: int = Column(Integer, primary_key=True, index=True)  # type: ignore[assignment]
    message: str = Column(String(500), nullable=False)  # type: ignore[assignment]
    order_id: str = Column(String(36), ForeignKey("orders.id"), nullable=False)  # type: ignore[assignment]
    user_id: str = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)  # type: ignore[assignment]
    read: bool = Column(Boolean, nullable=False, default=False)  # type: ignore[assignment]
    created_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )

    order = relationship("Order", back_populates="notifications")
    user = relationship("User")
