"""
Notification endpoints.

Planners and administrators see every notification; other roles only
see (and manage) their own.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy import delete as sa_delete
from sqlalchemy import select, true
from sqlalchemy.ext.asyncio import AsyncSession

from ordertrack.api.deps import get_current_user, get_db
from ordertrack.core.exceptions import InvalidRequest, NotFound
from ordertrack.core.fields import EDITABLE_FIELDS, POPUP_FIELDS
from ordertrack.core.permissions import PLANNING_ROLES
from ordertrack.models.notification import Notification
from ordertrack.models.order import Order
from ordertrack.models.user import User
from ordertrack.schemas.notification import (BulkDeleteRequest,
                                             BulkDeleteResponse,
                                             NotificationCreate,
                                             NotificationCreated,
                                             NotificationRead,
                                             NotificationUpdate)
from ordertrack.services.notifications import notify_field_update

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)

FEED_LIMIT = 50


def _visible_to(user: User):
    if user.role in PLANNING_ROLES:
        return true()
    return Notification.user_id == user.id


def _read_model(notification: Notification, verkoop_order: str | None) -> NotificationRead:
    item = NotificationRead.model_validate(notification)
    item.verkoop_order = verkoop_order
    return item


@router.get("", response_model=list[NotificationRead])
async def list_notifications(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[NotificationRead]:
    result = await db.execute(
        select(Notification, Order.verkoop_order)
        .join(Order, Notification.order_id == Order.id)
        .where(_visible_to(current_user))
        .order_by(Notification.created_at.desc(), Notification.id.desc())
        .limit(FEED_LIMIT)
    )
    return [_read_model(n, verkoop_order) for n, verkoop_order in result.all()]


@router.post("", response_model=NotificationCreated, status_code=status.HTTP_201_CREATED)
async def create_notification(
    body: NotificationCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> NotificationCreated:
    """Announce a field change on an order to every planner and administrator.

    Shares the one-minute duplicate window with order edits, so announcing
    an edit the API already recorded adds nothing.
    """
    if body.field not in EDITABLE_FIELDS and body.field not in POPUP_FIELDS:
        raise InvalidRequest(f"Invalid field name: {body.field}")

    order = await db.get(Order, body.order_id)
    if order is None:
        raise NotFound("Order not found")

    created = await notify_field_update(db, order, body.field, body.value, current_user)
    await db.commit()
    return NotificationCreated(
        notifications=[_read_model(n, order.verkoop_order) for n in created]
    )


@router.patch("/{notification_id}", response_model=NotificationRead)
async def update_notification(
    notification_id: int,
    body: NotificationUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> NotificationRead:
    """Mark a notification read or unread."""
    result = await db.execute(
        select(Notification, Order.verkoop_order)
        .join(Order, Notification.order_id == Order.id)
        .where(Notification.id == notification_id, _visible_to(current_user))
    )
    row = result.first()
    if row is None:
        raise NotFound("Notification not found")
    notification, verkoop_order = row

    notification.read = body.read
    await db.commit()
    await db.refresh(notification)
    return _read_model(notification, verkoop_order)


@router.post("/bulk-delete", response_model=BulkDeleteResponse)
async def bulk_delete_notifications(
    body: BulkDeleteRequest,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> BulkDeleteResponse:
    result = await db.execute(
        sa_delete(Notification).where(
            Notification.id.in_(body.ids), _visible_to(current_user)
        )
    )
    await db.commit()
    logger.info("%s deleted %d notification(s)", current_user.email, result.rowcount)
    return BulkDeleteResponse(deleted=result.rowcount)
