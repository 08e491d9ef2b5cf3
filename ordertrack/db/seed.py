"""
First-run data: the default administrator and the column permission
table derived from the edit policy.
"""

from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ordertrack.core.config import Settings
from ordertrack.core.fields import EDITABLE_FIELDS, POPUP_FIELDS
from ordertrack.core.permissions import can_role_edit
from ordertrack.core.security import get_password_hash
from ordertrack.models.column_permission import ColumnPermission
from ordertrack.models.user import Role, User

logger = logging.getLogger(__name__)

PERMISSION_COLUMNS: tuple[str, ...] = EDITABLE_FIELDS + POPUP_FIELDS


def default_permissions() -> list[ColumnPermission]:
    return [
        ColumnPermission(
            role=role,
            column=column,
            can_edit=can_role_edit(role, column),
            can_view=True,
        )
        for role in Role
        for column in PERMISSION_COLUMNS
    ]


async def seed_admin(session: AsyncSession, config: Settings) -> User | None:
    """Create the default BEHEERDER account unless it already exists."""
    result = await session.execute(select(User).where(User.email == config.FIRST_ADMIN_EMAIL))
    if result.scalar_one_or_none() is not None:
        return None
    admin = User(
        email=config.FIRST_ADMIN_EMAIL,
        hashed_password=get_password_hash(config.FIRST_ADMIN_PASSWORD),
        name="System Administrator",
        role=Role.BEHEERDER,
    )
    session.add(admin)
    await session.commit()
    logger.info("Default admin created: %s (password: <redacted>)", config.FIRST_ADMIN_EMAIL)
    return admin


async def seed_column_permissions(session: AsyncSession) -> int:
    """Fill an empty permission table from the policy; return rows added."""
    count = await session.scalar(select(func.count()).select_from(ColumnPermission))
    if count:
        return 0
    rows = default_permissions()
    session.add_all(rows)
    await session.commit()
    logger.info("Seeded %d column permissions", len(rows))
    return len(rows)
