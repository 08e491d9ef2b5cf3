"""
Settings endpoints — per-user preferences, plus admin settings that only
BEHEERDER may change.
"""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ordertrack.api.deps import get_current_user, get_db
from ordertrack.core.exceptions import Forbidden, InvalidRequest
from ordertrack.models.user import Role, User
from ordertrack.schemas.settings import SettingsRead, SettingsSaved, SettingsUpdate
from ordertrack.services.settings import merged_settings

router = APIRouter(prefix="/settings", tags=["settings"])
logger = logging.getLogger(__name__)


@router.get("", response_model=SettingsRead)
async def read_settings(
    current_user: User = Depends(get_current_user),
) -> SettingsRead:
    return SettingsRead(**merged_settings(current_user.settings))


@router.post("", response_model=SettingsSaved)
async def save_settings(
    body: SettingsUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> SettingsSaved:
    """Replace the caller's stored settings.

    The ``user`` section is required.  An ``admin`` section is refused for
    everyone but BEHEERDER.
    """
    if not body.user:
        raise InvalidRequest("Invalid settings format. Please try again.")
    if body.admin is not None and current_user.role != Role.BEHEERDER:
        raise Forbidden("Only BEHEERDER role can modify admin settings.")

    to_save: dict = {"user": body.user}
    if current_user.role == Role.BEHEERDER and body.admin is not None:
        to_save["admin"] = body.admin

    current_user.settings = json.dumps(to_save)
    await db.commit()
    logger.info("Settings saved for %s", current_user.email)
    return SettingsSaved(settings=to_save)
