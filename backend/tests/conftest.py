"""
Pytest fixtures for the test database, client, controllers and events.

Each test gets its own in-memory SQLite database. Fixtures write through
`db_session`; every HTTP request gets a fresh session from the same engine,
committed or rolled back exactly like `get_db` does in production.
"""

import os

os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["REDIS_ENABLED"] = "false"
os.environ["SECRET_KEY"] = "test-secret-key-for-testing-only"
os.environ["FACILITY_CODE"] = "ZDV"
os.environ["ACTIVITY_FEED"] = "database"

from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator

import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from artcc.main import app
from artcc.db.base import Base
from artcc.db.session import get_db
from artcc.core.security import create_access_token
from artcc.models.controller import Controller, ControllerRating
from artcc.models.event import Event, EventPosition, PositionCategory

ADMIN_CID = 1000001
EVENTS_CID = 1000002
TRAINING_CID = 1000003
MEMBER_CID = 1000004
OBSERVER_CID = 1000005
VISITOR_CID = 1000006


@pytest_asyncio.fixture(scope="function")
async def session_factory() -> AsyncGenerator[async_sessionmaker, None]:
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client that points the DB dependency at the test database."""

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


def make_controller(cid: int, first: str, last: str, **kwargs) -> Controller:
    values = dict(
        cid=cid,
        first_name=first,
        last_name=last,
        operating_initials=(first[0] + last[0]).upper(),
        rating=ControllerRating.S2,
        home_facility="ZDV",
        is_on_roster=True,
        roles="",
        join_date=datetime(2020, 1, 1, tzinfo=timezone.utc),
    )
    values.update(kwargs)
    return Controller(**values)


def auth_headers_for(cid: int) -> dict:
    token = create_access_token(data={"sub": str(cid)})
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def controllers(db_session: AsyncSession) -> dict[str, Controller]:
    """A small roster: one per permission level plus a visitor not on the roster."""
    roster = {
        "admin": make_controller(ADMIN_CID, "Alice", "Adams", roles="ATM", rating=ControllerRating.C1),
        "events": make_controller(EVENTS_CID, "Evan", "Evans", roles="EC"),
        "training": make_controller(TRAINING_CID, "Tara", "Tran", roles="INS", rating=ControllerRating.I1),
        "member": make_controller(MEMBER_CID, "Mark", "Miller"),
        "observer": make_controller(OBSERVER_CID, "Olive", "Owens", rating=ControllerRating.OBS),
        "visitor": make_controller(
            VISITOR_CID, "Victor", "Vance", home_facility="ZLA", is_on_roster=False
        ),
    }
    db_session.add_all(roster.values())
    await db_session.commit()
    return roster


@pytest_asyncio.fixture
async def admin_headers(controllers) -> dict:
    return auth_headers_for(ADMIN_CID)


@pytest_asyncio.fixture
async def events_headers(controllers) -> dict:
    return auth_headers_for(EVENTS_CID)


@pytest_asyncio.fixture
async def training_headers(controllers) -> dict:
    return auth_headers_for(TRAINING_CID)


@pytest_asyncio.fixture
async def member_headers(controllers) -> dict:
    return auth_headers_for(MEMBER_CID)


@pytest_asyncio.fixture
async def observer_headers(controllers) -> dict:
    return auth_headers_for(OBSERVER_CID)


@pytest_asyncio.fixture
async def visitor_headers(controllers) -> dict:
    return auth_headers_for(VISITOR_CID)


@pytest_asyncio.fixture
async def test_event(db_session: AsyncSession, controllers) -> Event:
    """A published event starting tomorrow."""
    start = datetime.now(timezone.utc) + timedelta(days=1)
    event = Event(
        name="Friday Night Ops",
        description="Full staffing at the major",
        start=start,
        end=start + timedelta(hours=3),
        published=True,
        created_by=EVENTS_CID,
    )
    db_session.add(event)
    await db_session.commit()
    return event


@pytest_asyncio.fixture
async def draft_event(db_session: AsyncSession, controllers) -> Event:
    start = datetime.now(timezone.utc) + timedelta(days=7)
    event = Event(
        name="Draft Event",
        start=start,
        end=start + timedelta(hours=2),
        published=False,
        created_by=EVENTS_CID,
    )
    db_session.add(event)
    await db_session.commit()
    return event


@pytest_asyncio.fixture
async def past_event(db_session: AsyncSession, controllers) -> Event:
    """A published event that ended yesterday."""
    start = datetime.now(timezone.utc) - timedelta(days=2)
    event = Event(
        name="Last Week Fly-in",
        start=start,
        end=start + timedelta(hours=3),
        published=True,
        created_by=EVENTS_CID,
    )
    db_session.add(event)
    await db_session.commit()
    return event


@pytest_asyncio.fixture
async def event_positions(db_session: AsyncSession, test_event: Event) -> list[EventPosition]:
    """Three unassigned positions on `test_event`."""
    positions = [
        EventPosition(event_id=test_event.id, category=PositionCategory.ENROUTE.value, name="DEN_CTR"),
        EventPosition(event_id=test_event.id, category=PositionCategory.TRACON.value, name="DEN_APP"),
        EventPosition(event_id=test_event.id, category=PositionCategory.LOCAL.value, name="DEN_TWR"),
    ]
    db_session.add_all(positions)
    await db_session.commit()
    return positions


@pytest_asyncio.fixture
async def fake_redis(monkeypatch):
    """Route the activity report cache to an in-memory Redis."""
    from mocks.mock_redis import FakeRedis
    from artcc.services import cache_service

    redis_client = FakeRedis()

    async def get_fake_redis():
        return redis_client

    monkeypatch.setattr(cache_service, "get_redis", get_fake_redis)
    return redis_client
