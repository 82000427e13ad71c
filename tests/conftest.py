"""
Shared fixtures: an in-memory SQLite database per test and an HTTP client
bound to the FastAPI app with `get_db` overridden.
"""

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from app.main import app
from app.db.session import get_db, Base

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

ALICE = "alice@example.com"
BOB = "bob@example.com"
CARA = "cara@example.com"
OUTSIDER = "outsider@example.com"


def as_member(email):
    return {"X-Member-Email": email}


@pytest.fixture
async def db_session():
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest.fixture
async def client(db_session):
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
async def trip_group(client):
    """A three-member group created by Alice."""
    response = await client.post(
        "/api/v1/groups/",
        json={"name": "Goa Trip", "member_emails": [BOB, CARA]},
        headers=as_member(ALICE),
    )
    assert response.status_code == 201
    return response.json()
