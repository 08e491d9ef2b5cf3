"""
Column edit policy — which roles may change which order column.

This is the single source of truth: API authorisation, permission
seeding and the client helper all call into it.
"""

from __future__ import annotations

from ordertrack.core.fields import LOCK_FIELD, SALES_FIELDS, STAGE_FIELDS, is_popup_field
from ordertrack.models.user import Role

PLANNING_ROLES: frozenset[Role] = frozenset({Role.BEHEERDER, Role.PLANNER})


def editable_roles(column: str) -> frozenset[Role]:
    """Roles allowed to edit *column*.  First matching rule wins."""
    if column == LOCK_FIELD:
        return PLANNING_ROLES
    if is_popup_field(column):
        return PLANNING_ROLES
    if column in SALES_FIELDS:
        return PLANNING_ROLES | {Role.SALES}
    if column in STAGE_FIELDS:
        return PLANNING_ROLES | {Role.SCANNER}
    return PLANNING_ROLES


def can_role_edit(role: Role | str | None, column: str) -> bool:
    if not role:
        return False
    try:
        role = Role(role)
    except ValueError:
        return False
    return role in editable_roles(column)
