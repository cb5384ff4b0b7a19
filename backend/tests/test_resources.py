"""
Tests for resource document metadata.
"""

import pytest
from httpx import AsyncClient
from sqlalchemy import select

from artcc.models.audit import AuditLog
from artcc.models.resource import Resource
from conftest import EVENTS_CID


async def _add_resources(db_session) -> list[Resource]:
    resources = [
        Resource(category="LOAs", name="ZDV-ZLC LOA", file_name="abc_zlc.pdf"),
        Resource(category="SOPs", name="DEN ATCT SOP", file_name="def_den.pdf"),
        Resource(category="SOPs", name="APA ATCT SOP", link="https://example.com/apa"),
    ]
    db_session.add_all(resources)
    await db_session.commit()
    return resources


@pytest.mark.asyncio
async def test_list_resources_is_public(client: AsyncClient, db_session):
    await _add_resources(db_session)

    response = await client.get("/api/v1/resources/")
    assert response.status_code == 200
    data = response.json()
    assert [r["name"] for r in data["resources"]] == ["APA ATCT SOP", "DEN ATCT SOP", "ZDV-ZLC LOA"]
    # configured order, only categories that have documents
    assert data["categories"] == ["SOPs", "LOAs"]


@pytest.mark.asyncio
async def test_create_resource(client: AsyncClient, db_session, events_headers):
    response = await client.post(
        "/api/v1/resources/",
        json={"category": "Policies", "name": "  Visiting Policy  ", "link": "https://example.com/v"},
        headers=events_headers,
    )
    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Visiting Policy"
    assert data["file_name"] is None

    messages = (await db_session.execute(select(AuditLog.message))).scalars().all()
    assert messages == [f"{EVENTS_CID} created a new resource name: Visiting Policy, category: Policies"]


@pytest.mark.asyncio
async def test_create_resource_requires_staff(client: AsyncClient, member_headers):
    response = await client.post(
        "/api/v1/resources/",
        json={"category": "SOPs", "name": "DEN SOP", "file_name": "den.pdf"},
        headers=member_headers,
    )
    assert response.status_code == 403


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"category": "Memes", "name": "DEN SOP", "file_name": "den.pdf"},
        {"category": "SOPs", "name": "   ", "file_name": "den.pdf"},
        {"category": "SOPs", "name": "DEN SOP", "file_name": " ", "link": None},
    ],
)
async def test_create_resource_invalid(client: AsyncClient, events_headers, payload):
    response = await client.post("/api/v1/resources/", json=payload, headers=events_headers)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_update_resource_replaces_fields(client: AsyncClient, db_session, events_headers):
    resource = (await _add_resources(db_session))[0]

    response = await client.put(
        f"/api/v1/resources/{resource.id}",
        json={"category": "LOAs", "name": "ZDV-ZLC LOA (2026)", "link": "https://example.com/loa"},
        headers=events_headers,
    )
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "ZDV-ZLC LOA (2026)"
    assert data["file_name"] is None
    assert data["link"] == "https://example.com/loa"

    messages = (await db_session.execute(select(AuditLog.message))).scalars().all()
    assert messages == [f"{EVENTS_CID} updated resource {resource.id}"]


@pytest.mark.asyncio
async def test_update_unknown_resource(client: AsyncClient, events_headers):
    response = await client.put(
        "/api/v1/resources/999",
        json={"category": "SOPs", "name": "DEN SOP", "file_name": "den.pdf"},
        headers=events_headers,
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_resource(client: AsyncClient, db_session, events_headers, member_headers):
    resource = (await _add_resources(db_session))[1]

    response = await client.delete(f"/api/v1/resources/{resource.id}", headers=member_headers)
    assert response.status_code == 403

    response = await client.delete(f"/api/v1/resources/{resource.id}", headers=events_headers)
    assert response.status_code == 200

    names = (await db_session.execute(select(Resource.name))).scalars().all()
    assert "DEN ATCT SOP" not in names

    messages = (await db_session.execute(select(AuditLog.message))).scalars().all()
    assert messages == [
        f"{EVENTS_CID} deleted resource {resource.id} (name: DEN ATCT SOP, category: SOPs)"
    ]


@pytest.mark.asyncio
async def test_delete_unknown_resource(client: AsyncClient, events_headers):
    response = await client.delete("/api/v1/resources/999", headers=events_headers)
    assert response.status_code == 404
