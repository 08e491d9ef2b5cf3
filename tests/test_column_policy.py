"""Tests for the column edit policy and the popup field registry."""

import pytest

from ordertrack.core.fields import POPUP_FIELDS, SALES_FIELDS, STAGE_FIELDS
from ordertrack.core.permissions import can_role_edit, editable_roles
from ordertrack.models.user import Role

PLANNING = {Role.BEHEERDER, Role.PLANNER}


def test_lock_flag_is_planning_only():
    assert editable_roles("slotje") == PLANNING
    assert can_role_edit("SALES", "slotje") is False
    assert can_role_edit("SCANNER", "slotje") is False
    assert can_role_edit("PLANNER", "slotje") is True


@pytest.mark.parametrize("column", POPUP_FIELDS)
def test_popup_fields_are_planning_only(column):
    assert editable_roles(column) == PLANNING


@pytest.mark.parametrize("column", SALES_FIELDS)
def test_sales_fields(column):
    assert editable_roles(column) == PLANNING | {Role.SALES}
    assert can_role_edit(Role.SCANNER, column) is False


@pytest.mark.parametrize("column", STAGE_FIELDS)
def test_stage_fields(column):
    assert editable_roles(column) == PLANNING | {Role.SCANNER}
    assert can_role_edit(Role.SALES, column) is False


def test_examples():
    assert can_role_edit("SALES", "project") is True
    assert can_role_edit("SCANNER", "pers") is True
    assert can_role_edit("SCANNER", "project") is False
    assert can_role_edit("BEHEERDER", "kleur") is True


def test_other_columns_default_to_planning():
    for column in ("kleur", "material", "tot", "not_a_column"):
        assert editable_roles(column) == PLANNING


@pytest.mark.parametrize("column", ["slotje", "project", "pers", "kleur", POPUP_FIELDS[0]])
def test_missing_role_never_edits(column):
    assert can_role_edit(None, column) is False
    assert can_role_edit("", column) is False


def test_guest_and_unknown_roles_never_edit():
    for column in ("project", "pers", "kleur"):
        assert can_role_edit(Role.GUEST, column) is False
        assert can_role_edit("ROOT", column) is False
