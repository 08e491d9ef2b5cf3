"""
Order list, scan lookup and order edit endpoints.

- GET /orders and GET /orders/scan/{order_number} are open (dashboard
  and scan station read access).
- Every write re-checks the caller's role against the column edit policy
  before touching storage.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ordertrack.api.deps import get_current_user, get_db
from ordertrack.core.exceptions import Forbidden, InvalidRequest, NotFound
from ordertrack.core.fields import (EDITABLE_FIELDS, LOCK_FIELD, POPUP_FIELDS,
                                    STAGE_FIELDS, coerce_field_value)
from ordertrack.core.pagination import paginate, pagination_info
from ordertrack.core.permissions import can_role_edit
from ordertrack.models.order import Order
from ordertrack.models.user import User
from ordertrack.schemas.order import (LockSummary, MachineActionRequest,
                                      OrderFieldUpdate, OrderRead,
                                      PopupInstructionUpdate, ScanOrderRead,
                                      ToggleLockResponse)
from ordertrack.services.notifications import (actor_name,
                                               notify_field_update,
                                               notify_planners)

router = APIRouter(prefix="/orders", tags=["orders"])
logger = logging.getLogger(__name__)


async def _get_order(db: AsyncSession, order_id: str) -> Order:
    result = await db.execute(select(Order).where(Order.id == order_id))
    order = result.scalar_one_or_none()
    if order is None:
        raise NotFound("Order not found")
    return order


def _ensure_unlocked(order: Order, user: User) -> None:
    """Locked orders stay editable only for roles that may unlock them."""
    if order.slotje and not can_role_edit(user.role, LOCK_FIELD):
        raise InvalidRequest("Order is locked and cannot be modified")


# ── Reads ───────────────────────────────────────────────────────────
@router.get("", response_model=list[OrderRead])
async def list_orders(
    response: Response,
    page: int | None = Query(default=None, ge=1),
    per_page: int = Query(default=50, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
) -> list[Order]:
    """All orders, latest delivery date first.  ``page`` slices the list."""
    result = await db.execute(
        select(Order).order_by(Order.lever_datum.desc().nulls_last(), Order.verkoop_order)
    )
    orders = list(result.scalars().all())
    if page is None:
        return orders

    info = pagination_info(len(orders), page, per_page)
    response.headers["X-Total-Count"] = str(len(orders))
    response.headers["X-Total-Pages"] = str(info.total_pages)
    return paginate(orders, page, per_page)


@router.get("/scan/{order_number}", response_model=ScanOrderRead)
async def scan_order(
    order_number: str,
    db: AsyncSession = Depends(get_db),
) -> Order:
    """Resolve a scanned order number to its stage-tracking projection."""
    result = await db.execute(
        select(Order)
        .where(Order.verkoop_order == order_number)
        .order_by(Order.created_at.desc())
        .limit(1)
    )
    order = result.scalar_one_or_none()
    if order is None:
        logger.info("Scan miss for order number %r", order_number)
        raise NotFound("Order not found")
    return order


# ── Writes ──────────────────────────────────────────────────────────
@router.patch("/{order_id}", response_model=OrderRead)
async def update_order_field(
    order_id: str,
    body: OrderFieldUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Order:
    """Update one column of an order."""
    item = body.single_item()
    if item is None:
        raise InvalidRequest("Request must contain exactly one field to update")
    field, raw_value = item

    if field not in EDITABLE_FIELDS:
        raise InvalidRequest(f"Invalid field name: {field}")
    if not can_role_edit(current_user.role, field):
        raise Forbidden(f"You don't have permission to edit the {field} field")

    try:
        value = coerce_field_value(field, raw_value)
    except ValueError as exc:
        raise InvalidRequest(str(exc)) from None

    order = await _get_order(db, order_id)
    _ensure_unlocked(order, current_user)

    setattr(order, field, value)
    order.updated_at = datetime.now(timezone.utc)
    await notify_field_update(db, order, field, value, current_user)
    await db.commit()
    await db.refresh(order)
    logger.info("Order %s: %s updated by %s", order.verkoop_order, field, current_user.email)
    return order


@router.post("/{order_id}/toggle-slotje", response_model=ToggleLockResponse)
async def toggle_lock(
    order_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ToggleLockResponse:
    """Lock or unlock an order."""
    if not can_role_edit(current_user.role, LOCK_FIELD):
        raise Forbidden("Only PLANNER and BEHEERDER can toggle slotje status")

    order = await _get_order(db, order_id)
    order.slotje = not order.slotje
    state = "locked" if order.slotje else "unlocked"

    await notify_planners(
        db, order, f"Order {order.verkoop_order} has been {state} by {actor_name(current_user)}"
    )
    await db.commit()
    await db.refresh(order)
    logger.info("Order %s %s by %s", order.verkoop_order, state, current_user.email)
    return ToggleLockResponse(
        order=LockSummary.model_validate(order),
        message=f"Order {state} successfully",
    )


@router.patch("/{order_id}/popup-instructions", response_model=OrderRead)
async def update_popup_instruction(
    order_id: str,
    body: PopupInstructionUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Order:
    """Set the work instruction text for one production step."""
    if body.field not in POPUP_FIELDS:
        raise InvalidRequest("Invalid popup field")
    if not can_role_edit(current_user.role, body.field):
        raise Forbidden("You do not have permission to update instructions")

    order = await _get_order(db, order_id)
    setattr(order, body.field, body.value)

    step = body.field.removeprefix("popup_text_")
    await notify_planners(
        db,
        order,
        f"Instruction for {step} updated for order {order.verkoop_order} "
        f"by {actor_name(current_user)}",
    )
    await db.commit()
    await db.refresh(order)
    return order


@router.post("/{order_id}/machine-action", response_model=ScanOrderRead)
async def start_machine_action(
    order_id: str,
    body: MachineActionRequest,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Order:
    """Stamp the current time into a production stage from the scan station."""
    if not body.action or not body.field:
        raise InvalidRequest("Missing required fields: action or field")
    if body.field not in STAGE_FIELDS:
        raise InvalidRequest(f"Invalid machine field: {body.field}")
    if not can_role_edit(current_user.role, body.field):
        raise Forbidden("You do not have permission to perform machine actions")

    order = await _get_order(db, order_id)
    if order.slotje:
        raise InvalidRequest("Order is locked and cannot be modified")
    if getattr(order, body.field) is not None:
        raise InvalidRequest("Machine action already started")

    setattr(order, body.field, datetime.now(timezone.utc))
    await notify_planners(
        db,
        order,
        f"Order {order.verkoop_order} machine action {body.field} started "
        f"by {actor_name(current_user)}",
    )
    await db.commit()
    await db.refresh(order)
    logger.info("Order %s: %s started by %s", order.verkoop_order, body.field, current_user.email)
    return order
