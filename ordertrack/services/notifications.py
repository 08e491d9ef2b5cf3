"""Fan-out of order change notifications to planners and administrators."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ordertrack.core.permissions import PLANNING_ROLES
from ordertrack.models.notification import Notification
from ordertrack.models.order import Order
from ordertrack.models.user import User

logger = logging.getLogger(__name__)

DUPLICATE_WINDOW = timedelta(seconds=60)


def display_value(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, datetime):
        return value.date().isoformat()
    return str(value)


def actor_name(user: User) -> str:
    return user.name or user.email


async def notify_planners(
    db: AsyncSession,
    order: Order,
    message: str,
    duplicate_prefix: str | None = None,
) -> list[Notification]:
    """Add one notification per planner/administrator for *order*.

    Skipped when a matching message was recorded for the order within the
    last minute.  Messages match exactly, or by *duplicate_prefix* when
    given (so repeated edits of one field collapse whatever the value).
    The caller commits.
    """
    since = datetime.now(timezone.utc) - DUPLICATE_WINDOW
    if duplicate_prefix is not None:
        same_message = Notification.message.startswith(duplicate_prefix, autoescape=True)
    else:
        same_message = Notification.message == message
    recent = await db.execute(
        select(Notification.id)
        .where(
            Notification.order_id == order.id,
            same_message,
            Notification.created_at >= since,
        )
        .limit(1)
    )
    if recent.scalar_one_or_none() is not None:
        logger.debug("Skipping duplicate notification for order %s", order.verkoop_order)
        return []

    recipients = await db.execute(select(User.id).where(User.role.in_(list(PLANNING_ROLES))))
    notifications = [
        Notification(message=message, order_id=order.id, user_id=user_id)
        for user_id in recipients.scalars().all()
    ]
    db.add_all(notifications)
    return notifications


async def notify_field_update(
    db: AsyncSession, order: Order, field: str, value: Any, user: User
) -> list[Notification]:
    """Announce a field edit; repeated edits of one field within the window collapse."""
    updated = f"Order {order.verkoop_order} had {field} updated"
    return await notify_planners(
        db,
        order,
        f"{updated} to {display_value(value)} by {actor_name(user)}",
        duplicate_prefix=updated,
    )
