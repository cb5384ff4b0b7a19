"""
Tests for visitor applications.
"""

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select

from artcc.models.audit import AuditLog
from artcc.models.controller import Controller
from artcc.models.visitor import VisitorApplication
from conftest import ADMIN_CID, VISITOR_CID


async def _apply(client: AsyncClient, headers: dict, reason: str = "Want to work DEN events"):
    return await client.post(
        "/api/v1/visitor-applications/", json={"reason": reason}, headers=headers
    )


async def _application_count(db_session) -> int:
    result = await db_session.execute(select(func.count()).select_from(VisitorApplication))
    return result.scalar()


async def _on_roster(db_session, cid: int) -> bool:
    result = await db_session.execute(select(Controller.is_on_roster).where(Controller.cid == cid))
    return result.scalar_one()


@pytest.mark.asyncio
async def test_apply_copies_controller_details(client: AsyncClient, visitor_headers):
    response = await _apply(client, visitor_headers)
    assert response.status_code == 201
    data = response.json()
    assert data["cid"] == VISITOR_CID
    assert data["first_name"] == "Victor"
    assert data["home_facility"] == "ZLA"
    assert data["reason"] == "Want to work DEN events"


@pytest.mark.asyncio
async def test_apply_twice_rejected(client: AsyncClient, db_session, visitor_headers):
    assert (await _apply(client, visitor_headers)).status_code == 201

    response = await _apply(client, visitor_headers, reason="Again")
    assert response.status_code == 400
    assert await _application_count(db_session) == 1


@pytest.mark.asyncio
async def test_apply_when_on_roster_rejected(client: AsyncClient, member_headers):
    response = await _apply(client, member_headers)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_list_applications_admin_only(client: AsyncClient, visitor_headers, events_headers, admin_headers):
    await _apply(client, visitor_headers)

    assert (await client.get("/api/v1/admin/visitor-applications/", headers=events_headers)).status_code == 403

    response = await client.get("/api/v1/admin/visitor-applications/", headers=admin_headers)
    assert response.status_code == 200
    assert [a["cid"] for a in response.json()] == [VISITOR_CID]


@pytest.mark.asyncio
async def test_accept_puts_controller_on_roster(
    client: AsyncClient, db_session, visitor_headers, admin_headers
):
    application_id = (await _apply(client, visitor_headers)).json()["id"]

    response = await client.post(
        f"/api/v1/admin/visitor-applications/{application_id}",
        json={"action": "accept"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["message"] == "Application accepted"

    assert await _on_roster(db_session, VISITOR_CID) is True
    assert await _application_count(db_session) == 0

    roster = (await client.get("/api/v1/controllers/")).json()
    assert VISITOR_CID in [c["cid"] for c in roster]

    messages = (await db_session.execute(select(AuditLog.message))).scalars().all()
    assert (
        f"{ADMIN_CID} taking action accept on visitor request {application_id} "
        f"for Victor Vance ({VISITOR_CID})"
    ) in messages


@pytest.mark.asyncio
async def test_deny_removes_application_only(
    client: AsyncClient, db_session, visitor_headers, admin_headers
):
    application_id = (await _apply(client, visitor_headers)).json()["id"]

    response = await client.post(
        f"/api/v1/admin/visitor-applications/{application_id}",
        json={"action": "deny"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["message"] == "Application denied"

    assert await _on_roster(db_session, VISITOR_CID) is False
    assert await _application_count(db_session) == 0

    # a denied controller may apply again
    assert (await _apply(client, visitor_headers)).status_code == 201


@pytest.mark.asyncio
async def test_decide_requires_admin(client: AsyncClient, visitor_headers, training_headers):
    application_id = (await _apply(client, visitor_headers)).json()["id"]
    response = await client.post(
        f"/api/v1/admin/visitor-applications/{application_id}",
        json={"action": "accept"},
        headers=training_headers,
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_decide_unknown_application(client: AsyncClient, admin_headers):
    response = await client.post(
        "/api/v1/admin/visitor-applications/999", json={"action": "deny"}, headers=admin_headers
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_decide_bad_action(client: AsyncClient, visitor_headers, admin_headers):
    application_id = (await _apply(client, visitor_headers)).json()["id"]
    response = await client.post(
        f"/api/v1/admin/visitor-applications/{application_id}",
        json={"action": "maybe"},
        headers=admin_headers,
    )
    assert response.status_code == 422
