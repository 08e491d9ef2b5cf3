"""
Custom page endpoints — named column sets every signed-in user can open
and only BEHEERDER can create or remove.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ordertrack.api.deps import get_current_identity, get_current_user, get_db
from ordertrack.core.exceptions import Forbidden, InvalidRequest, NotFound
from ordertrack.models.custom_page import CustomPage
from ordertrack.models.order import Order
from ordertrack.models.user import Role, User
from ordertrack.schemas.custom_page import (CustomPageCreate, CustomPageDelete,
                                            CustomPageRead)
from ordertrack.schemas.token import Identity, SuccessResponse

router = APIRouter(prefix="/custom-pages", tags=["custom-pages"])
logger = logging.getLogger(__name__)


def _require_admin(user: User, action: str) -> None:
    if user.role != Role.BEHEERDER:
        raise Forbidden(f"Only beheerders can {action} custom pages")


@router.get("", response_model=list[CustomPageRead])
async def list_custom_pages(
    db: AsyncSession = Depends(get_db),
    _identity: Identity = Depends(get_current_identity),
) -> list[CustomPage]:
    result = await db.execute(select(CustomPage).order_by(CustomPage.name))
    return list(result.scalars().all())


@router.post("", response_model=CustomPageRead, status_code=status.HTTP_201_CREATED)
async def create_custom_page(
    body: CustomPageCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> CustomPage:
    _require_admin(current_user, "create")

    name = body.name.strip()
    if not name:
        raise InvalidRequest("Page name is required")
    if not body.columns:
        raise InvalidRequest("At least one column must be selected")
    unknown = [c for c in body.columns if c not in Order.__table__.columns]
    if unknown:
        raise InvalidRequest(f"Unknown columns: {', '.join(unknown)}")

    existing = await db.execute(select(CustomPage.id).where(CustomPage.name == name))
    if existing.scalar_one_or_none() is not None:
        raise InvalidRequest("A page with this name already exists")

    page = CustomPage(name=name, columns=list(body.columns), created_by=current_user.id)
    db.add(page)
    await db.commit()
    await db.refresh(page)
    logger.info("Custom page %r created by %s", name, current_user.email)
    return page


@router.delete("", response_model=SuccessResponse)
async def delete_custom_page(
    body: CustomPageDelete,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> SuccessResponse:
    _require_admin(current_user, "delete")
    if not body.id:
        raise InvalidRequest("Page ID is required")

    page = await db.get(CustomPage, body.id)
    if page is None:
        raise NotFound("Custom page not found")

    await db.delete(page)
    await db.commit()
    logger.info("Custom page %r deleted by %s", page.name, current_user.email)
    return SuccessResponse()
