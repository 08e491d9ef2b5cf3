"""Tests for the order list and order edit endpoints."""

from datetime import datetime, timezone

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ordertrack.models.notification import Notification
from ordertrack.models.order import Order
from ordertrack.models.user import Role


async def _reload(db_session: AsyncSession, order_id: str) -> Order:
    db_session.expire_all()
    result = await db_session.execute(select(Order).where(Order.id == order_id))
    return result.scalar_one()


# ── List ────────────────────────────────────────────────────────────
@pytest.mark.asyncio
async def test_list_orders_latest_delivery_first(async_client: AsyncClient, make_order):
    await make_order("SO-1", lever_datum=datetime(2026, 1, 10, tzinfo=timezone.utc))
    await make_order("SO-2", lever_datum=datetime(2026, 3, 1, tzinfo=timezone.utc))
    await make_order("SO-3")

    resp = await async_client.get("/api/orders")
    assert resp.status_code == 200
    data = resp.json()
    assert [o["verkoop_order"] for o in data] == ["SO-2", "SO-1", "SO-3"]
    # Full records, not the scan projection
    assert "slotje" in data[0]
    assert "popup_text_pers" in data[0]


@pytest.mark.asyncio
async def test_list_orders_pagination(async_client: AsyncClient, make_order):
    for i in range(5):
        await make_order(f"PAGE-{i}", lever_datum=datetime(2026, 1, 10 - i, tzinfo=timezone.utc))

    resp = await async_client.get("/api/orders?page=2&per_page=2")
    assert resp.status_code == 200
    assert [o["verkoop_order"] for o in resp.json()] == ["PAGE-2", "PAGE-3"]
    assert resp.headers["X-Total-Count"] == "5"
    assert resp.headers["X-Total-Pages"] == "3"


# ── Single field edits ──────────────────────────────────────────────
@pytest.mark.asyncio
async def test_sales_can_edit_sales_column(
    async_client: AsyncClient, make_user, make_order, auth_headers, db_session
):
    sales = await make_user(Role.SALES)
    order = await make_order()

    resp = await async_client.patch(
        f"/api/orders/{order.id}", json={"project": "New Project"}, headers=auth_headers(sales)
    )
    assert resp.status_code == 200
    assert resp.json()["project"] == "New Project"
    assert (await _reload(db_session, order.id)).project == "New Project"


@pytest.mark.asyncio
async def test_sales_cannot_edit_stage_column(
    async_client: AsyncClient, make_user, make_order, auth_headers
):
    sales = await make_user(Role.SALES)
    order = await make_order()

    resp = await async_client.patch(
        f"/api/orders/{order.id}", json={"pers": "2026-02-01"}, headers=auth_headers(sales)
    )
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_scanner_can_set_stage_timestamp(
    async_client: AsyncClient, make_user, make_order, auth_headers, db_session
):
    scanner = await make_user(Role.SCANNER)
    order = await make_order()

    resp = await async_client.patch(
        f"/api/orders/{order.id}",
        json={"pers": "2026-02-01T08:30:00Z"},
        headers=auth_headers(scanner),
    )
    assert resp.status_code == 200
    assert resp.json()["pers"].startswith("2026-02-01T08:30:00")


@pytest.mark.asyncio
async def test_stage_fields_may_be_set_out_of_order(
    async_client: AsyncClient, make_user, make_order, auth_headers
):
    planner = await make_user(Role.PLANNER)
    order = await make_order()

    resp = await async_client.patch(
        f"/api/orders/{order.id}", json={"cnc_start_datum": "2026-02-03"}, headers=auth_headers(planner)
    )
    assert resp.status_code == 200
    assert resp.json()["bruto_zagen"] is None


@pytest.mark.asyncio
async def test_edit_requires_session(async_client: AsyncClient, make_order):
    order = await make_order()
    resp = await async_client.patch(f"/api/orders/{order.id}", json={"project": "x"})
    assert resp.status_code == 401


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body, message",
    [
        ({}, "exactly one field"),
        ({"project": "a", "opmerking": "b"}, "exactly one field"),
        ({"hacked": 1}, "Invalid field name"),
        ({"lever_datum": "not-a-date"}, "Invalid date format"),
        ({"height": "tall"}, "Invalid number format"),
        ({"height": "NaN"}, "Invalid number format"),
        ({"height": "inf"}, "Invalid number format"),
        ({"height": "-Infinity"}, "Invalid number format"),
        ({"kleur": True}, "Invalid value"),
    ],
)
async def test_edit_rejects_bad_bodies(
    async_client: AsyncClient, make_user, make_order, auth_headers, body, message
):
    planner = await make_user(Role.PLANNER)
    order = await make_order()

    resp = await async_client.patch(f"/api/orders/{order.id}", json=body, headers=auth_headers(planner))
    assert resp.status_code == 400
    assert message in resp.json()["error"]


@pytest.mark.asyncio
async def test_edit_unknown_order(async_client: AsyncClient, make_user, auth_headers):
    planner = await make_user(Role.PLANNER)
    resp = await async_client.patch("/api/orders/missing", json={"kleur": "red"}, headers=auth_headers(planner))
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_locked_order_blocks_sales_but_not_planner(
    async_client: AsyncClient, make_user, make_order, auth_headers
):
    sales = await make_user(Role.SALES)
    planner = await make_user(Role.PLANNER)
    order = await make_order(slotje=True)

    resp = await async_client.patch(f"/api/orders/{order.id}", json={"opmerking": "x"}, headers=auth_headers(sales))
    assert resp.status_code == 400
    assert "locked" in resp.json()["error"]

    resp = await async_client.patch(f"/api/orders/{order.id}", json={"opmerking": "x"}, headers=auth_headers(planner))
    assert resp.status_code == 200


@pytest.mark.asyncio
async def test_edit_notifies_planners_once(
    async_client: AsyncClient, make_user, make_order, auth_headers, db_session
):
    planner = await make_user(Role.PLANNER)
    await make_user(Role.BEHEERDER)
    await make_user(Role.SALES)
    order = await make_order()

    for _ in range(2):
        resp = await async_client.patch(
            f"/api/orders/{order.id}", json={"kleur": "white"}, headers=auth_headers(planner)
        )
        assert resp.status_code == 200

    result = await db_session.execute(select(Notification))
    notifications = result.scalars().all()
    # one per planner/administrator, duplicate within a minute suppressed
    assert len(notifications) == 2
    assert "had kleur updated to white" in notifications[0].message


@pytest.mark.asyncio
async def test_repeated_field_edits_collapse_into_one_notification(
    async_client: AsyncClient, make_user, make_order, auth_headers, db_session
):
    planner = await make_user(Role.PLANNER)
    order = await make_order()

    for body in ({"kleur": "white"}, {"kleur": "black"}, {"kantenband": "ABS"}):
        resp = await async_client.patch(f"/api/orders/{order.id}", json=body, headers=auth_headers(planner))
        assert resp.status_code == 200

    result = await db_session.execute(select(Notification.message).order_by(Notification.id))
    messages = result.scalars().all()
    # second kleur edit within the minute is suppressed, the other field is not
    assert len(messages) == 2
    assert "had kleur updated to white" in messages[0]
    assert "had kantenband updated to ABS" in messages[1]


@pytest.mark.asyncio
@pytest.mark.parametrize("value", ["NaN", "inf"])
async def test_non_finite_number_leaves_column_unchanged(
    async_client: AsyncClient, make_user, make_order, auth_headers, db_session, value
):
    planner = await make_user(Role.PLANNER)
    order = await make_order(height=18.0)

    resp = await async_client.patch(f"/api/orders/{order.id}", json={"height": value}, headers=auth_headers(planner))
    assert resp.status_code == 400

    assert (await _reload(db_session, order.id)).height == 18.0
    listing = await async_client.get("/api/orders")
    assert listing.status_code == 200


# ── Lock toggle ─────────────────────────────────────────────────────
@pytest.mark.asyncio
async def test_toggle_lock(async_client: AsyncClient, make_user, make_order, auth_headers):
    planner = await make_user(Role.PLANNER)
    order = await make_order()

    resp = await async_client.post(f"/api/orders/{order.id}/toggle-slotje", headers=auth_headers(planner))
    assert resp.status_code == 200
    data = resp.json()
    assert data["order"]["slotje"] is True
    assert data["message"] == "Order locked successfully"

    resp = await async_client.post(f"/api/orders/{order.id}/toggle-slotje", headers=auth_headers(planner))
    assert resp.json()["order"]["slotje"] is False


@pytest.mark.asyncio
@pytest.mark.parametrize("role", [Role.SALES, Role.SCANNER, Role.GUEST])
async def test_toggle_lock_forbidden(async_client: AsyncClient, make_user, make_order, auth_headers, role):
    user = await make_user(role)
    order = await make_order()
    resp = await async_client.post(f"/api/orders/{order.id}/toggle-slotje", headers=auth_headers(user))
    assert resp.status_code == 403


# ── Popup instructions ──────────────────────────────────────────────
@pytest.mark.asyncio
async def test_popup_instruction_update(async_client: AsyncClient, make_user, make_order, auth_headers):
    planner = await make_user(Role.PLANNER)
    order = await make_order()

    resp = await async_client.patch(
        f"/api/orders/{order.id}/popup-instructions",
        json={"field": "popup_text_cnc", "value": "Use program 12"},
        headers=auth_headers(planner),
    )
    assert resp.status_code == 200
    assert resp.json()["popup_text_cnc"] == "Use program 12"


@pytest.mark.asyncio
async def test_popup_instruction_rules(async_client: AsyncClient, make_user, make_order, auth_headers):
    planner = await make_user(Role.PLANNER)
    sales = await make_user(Role.SALES)
    order = await make_order()
    url = f"/api/orders/{order.id}/popup-instructions"

    resp = await async_client.patch(url, json={"field": "project", "value": "x"}, headers=auth_headers(planner))
    assert resp.status_code == 400

    resp = await async_client.patch(url, json={"field": "popup_text_pers", "value": "x"}, headers=auth_headers(sales))
    assert resp.status_code == 403


# ── Machine actions ─────────────────────────────────────────────────
@pytest.mark.asyncio
async def test_machine_action_stamps_stage(async_client: AsyncClient, make_user, make_order, auth_headers):
    scanner = await make_user(Role.SCANNER)
    order = await make_order()
    url = f"/api/orders/{order.id}/machine-action"

    resp = await async_client.post(url, json={"action": "start", "field": "verkantlijmen"}, headers=auth_headers(scanner))
    assert resp.status_code == 200
    assert resp.json()["verkantlijmen"] is not None

    again = await async_client.post(url, json={"action": "start", "field": "verkantlijmen"}, headers=auth_headers(scanner))
    assert again.status_code == 400
    assert again.json()["error"] == "Machine action already started"


@pytest.mark.asyncio
async def test_machine_action_rejections(async_client: AsyncClient, make_user, make_order, auth_headers):
    scanner = await make_user(Role.SCANNER)
    sales = await make_user(Role.SALES)
    locked = await make_order("SO-LOCK", slotje=True)
    url = f"/api/orders/{locked.id}/machine-action"

    resp = await async_client.post(url, json={"action": "start", "field": "pers"}, headers=auth_headers(scanner))
    assert resp.status_code == 400
    assert "locked" in resp.json()["error"]

    resp = await async_client.post(url, json={"action": "start", "field": "pers"}, headers=auth_headers(sales))
    assert resp.status_code == 403

    resp = await async_client.post(url, json={"action": "start", "field": "kleur"}, headers=auth_headers(scanner))
    assert resp.status_code == 400

    resp = await async_client.post(url, json={"field": "pers"}, headers=auth_headers(scanner))
    assert resp.status_code == 400
