"""
Tests for no-show tracking.
"""

import pytest
from datetime import datetime, timedelta, timezone
from httpx import AsyncClient

from artcc.models.no_show import NoShow
from conftest import ADMIN_CID, EVENTS_CID, MEMBER_CID, OBSERVER_CID, TRAINING_CID, auth_headers_for


async def _add_entries(db_session):
    entries = [
        NoShow(cid=MEMBER_CID, reported_by=EVENTS_CID, kind="event", notes="Missed DEN_APP slot"),
        NoShow(cid=OBSERVER_CID, reported_by=TRAINING_CID, kind="training", notes="No call, no show"),
    ]
    db_session.add_all(entries)
    await db_session.commit()
    return entries


@pytest.mark.asyncio
async def test_create_no_show(client: AsyncClient, events_headers):
    response = await client.post(
        "/api/v1/no-shows/",
        json={"cid": MEMBER_CID, "kind": "event", "notes": "Did not show for CTR"},
        headers=events_headers,
    )
    assert response.status_code == 201
    data = response.json()
    assert data["reported_by"] == EVENTS_CID
    assert data["kind"] == "event"
    assert data["notified"] is False


@pytest.mark.asyncio
async def test_create_no_show_unknown_controller(client: AsyncClient, events_headers):
    response = await client.post(
        "/api/v1/no-shows/", json={"cid": 4242, "kind": "event"}, headers=events_headers
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_create_no_show_bad_kind(client: AsyncClient, events_headers):
    response = await client.post(
        "/api/v1/no-shows/", json={"cid": MEMBER_CID, "kind": "meeting"}, headers=events_headers
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_create_no_show_requires_staff(client: AsyncClient, member_headers):
    response = await client.post(
        "/api/v1/no-shows/", json={"cid": OBSERVER_CID, "kind": "event"}, headers=member_headers
    )
    assert response.status_code == 403


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "cid,filtering,kinds",
    [
        (ADMIN_CID, "all", {"event", "training"}),
        (EVENTS_CID, "event", {"event"}),
        (TRAINING_CID, "training", {"training"}),
    ],
)
async def test_list_no_shows_by_team(
    client: AsyncClient, db_session, controllers, cid, filtering, kinds
):
    headers = auth_headers_for(cid)
    await _add_entries(db_session)

    response = await client.get("/api/v1/no-shows/", headers=headers)
    assert response.status_code == 200
    data = response.json()
    assert data["filtering"] == filtering
    assert {e["kind"] for e in data["entries"]} == kinds


@pytest.mark.asyncio
async def test_list_no_shows_requires_staff(client: AsyncClient, member_headers):
    response = await client.get("/api/v1/no-shows/", headers=member_headers)
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_delete_by_reporter(client: AsyncClient, db_session, events_headers):
    event_entry, _ = await _add_entries(db_session)
    response = await client.delete(f"/api/v1/no-shows/{event_entry.id}", headers=events_headers)
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_delete_by_other_staff_rejected(client: AsyncClient, db_session, training_headers):
    event_entry, _ = await _add_entries(db_session)
    response = await client.delete(f"/api/v1/no-shows/{event_entry.id}", headers=training_headers)
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_delete_by_admin(client: AsyncClient, db_session, admin_headers):
    _, training_entry = await _add_entries(db_session)
    response = await client.delete(f"/api/v1/no-shows/{training_entry.id}", headers=admin_headers)
    assert response.status_code == 200

    response = await client.get("/api/v1/no-shows/", headers=admin_headers)
    assert [e["kind"] for e in response.json()["entries"]] == ["event"]


@pytest.mark.asyncio
async def test_delete_missing_entry(client: AsyncClient, admin_headers):
    response = await client.delete("/api/v1/no-shows/99999", headers=admin_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_purge_expired(client: AsyncClient, db_session, admin_headers):
    now = datetime.now(timezone.utc)
    db_session.add_all([
        NoShow(cid=MEMBER_CID, reported_by=ADMIN_CID, kind="event", created_at=now - timedelta(days=200)),
        NoShow(cid=MEMBER_CID, reported_by=ADMIN_CID, kind="event", created_at=now - timedelta(days=30)),
    ])
    await db_session.commit()

    response = await client.post("/api/v1/no-shows/purge", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["deleted"] == 1

    response = await client.get("/api/v1/no-shows/", headers=admin_headers)
    assert len(response.json()["entries"]) == 1


@pytest.mark.asyncio
async def test_purge_requires_admin(client: AsyncClient, events_headers):
    response = await client.post("/api/v1/no-shows/purge", headers=events_headers)
    assert response.status_code == 403
