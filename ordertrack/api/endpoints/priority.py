"""
Priority list endpoints — one shared list of order ids, replaced as a
whole on every save.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import delete as sa_delete
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ordertrack.api.deps import get_current_identity, get_current_user, get_db
from ordertrack.core.exceptions import InvalidRequest
from ordertrack.models.order import Order
from ordertrack.models.priority_order import PriorityOrder
from ordertrack.models.user import User
from ordertrack.schemas.order import OrderRead
from ordertrack.schemas.priority import PriorityOrderRead, PriorityOrderUpdate
from ordertrack.schemas.token import Identity

router = APIRouter(prefix="/priority-orders", tags=["priority-orders"])
logger = logging.getLogger(__name__)


async def _read_model(db: AsyncSession, priority: PriorityOrder) -> PriorityOrderRead:
    """Attach the listed orders in list order; ids of deleted orders are skipped."""
    orders: dict[str, Order] = {}
    if priority.order_ids:
        result = await db.execute(select(Order).where(Order.id.in_(priority.order_ids)))
        orders = {order.id: order for order in result.scalars().all()}
    return PriorityOrderRead(
        id=priority.id,
        order_ids=priority.order_ids,
        updated_by=priority.updated_by,
        updated_at=priority.updated_at,
        orders=[OrderRead.model_validate(orders[i]) for i in priority.order_ids if i in orders],
    )


@router.get("", response_model=PriorityOrderRead)
async def read_priority_orders(
    db: AsyncSession = Depends(get_db),
    _identity: Identity = Depends(get_current_identity),
) -> PriorityOrderRead:
    result = await db.execute(select(PriorityOrder).order_by(PriorityOrder.id.desc()).limit(1))
    priority = result.scalar_one_or_none()
    if priority is None:
        return PriorityOrderRead()
    return await _read_model(db, priority)


@router.post("", response_model=PriorityOrderRead)
async def replace_priority_orders(
    body: PriorityOrderUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> PriorityOrderRead:
    """Replace the priority list with ``orderIds``, in the given order."""
    order_ids = body.order_ids
    if not isinstance(order_ids, list) or not all(isinstance(i, str) for i in order_ids):
        raise InvalidRequest("Invalid request format. Expected array of order IDs")

    await db.execute(sa_delete(PriorityOrder))
    priority = PriorityOrder(order_ids=list(dict.fromkeys(order_ids)), updated_by=current_user.id)
    db.add(priority)
    await db.commit()
    await db.refresh(priority)
    logger.info("Priority list replaced by %s (%d orders)", current_user.email, len(priority.order_ids))
    return await _read_model(db, priority)
