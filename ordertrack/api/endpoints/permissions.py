"""
Column permission endpoint — the persisted grants for the caller's role.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ordertrack.api.deps import get_current_user, get_db
from ordertrack.models.column_permission import ColumnPermission
from ordertrack.models.user import User
from ordertrack.schemas.permission import ColumnPermissionRead

router = APIRouter(tags=["permissions"])


@router.get("/permissions", response_model=list[ColumnPermissionRead])
async def list_permissions(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[ColumnPermission]:
    """Every ColumnPermission row for the caller's role."""
    result = await db.execute(
        select(ColumnPermission)
        .where(ColumnPermission.role == current_user.role)
        .order_by(ColumnPermission.column)
    )
    return list(result.scalars().all())
