"""
Shared fixtures: a throwaway SQLite database per test, seeded users and tours,
and an httpx client wired to the ASGI app.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./tourhub_test.db")
os.environ.setdefault("SECURITY_JWT_SECRET", "test-secret")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from tourhub.core.db import Base, get_db
from tourhub.core.jwt import create_access_token
from tourhub.core.metrics import reset_metrics
from tourhub.main import app
from tourhub.models.tour import Tour
from tourhub.models.user import User


@pytest_asyncio.fixture
async def session_factory(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'favorites.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(
        bind=engine, autoflush=False, expire_on_commit=False, class_=AsyncSession
    )
    yield factory
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def test_user(db_session) -> User:
    user = User(email="traveler@example.com", role="customer")
    db_session.add(user)
    await db_session.commit()
    return user


@pytest_asyncio.fixture
async def other_user(db_session) -> User:
    user = User(email="someone-else@example.com", role="customer")
    db_session.add(user)
    await db_session.commit()
    return user


@pytest_asyncio.fixture
async def tours(db_session):
    items = [
        Tour(title="Ha Long Bay Cruise", price=120.0, location="Quang Ninh", images=["halong.jpg"]),
        Tour(title="Hoi An Lantern Walk", price=35.5, location="Quang Nam", images=[]),
        Tour(title="Sapa Trekking", price=89.0, location="Lao Cai", images=["sapa-1.jpg", "sapa-2.jpg"]),
        Tour(title="Mekong Delta Day Trip", price=60.0, location="Can Tho"),
    ]
    db_session.add_all(items)
    await db_session.commit()
    return items


@pytest.fixture(autouse=True)
def _reset_process_state():
    reset_metrics()
    yield
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def async_client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


def _auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(str(user.id))}"}


@pytest.fixture
def headers_for():
    """Build Authorization headers for any user."""
    return _auth_headers


@pytest.fixture
def authenticated_headers(test_user):
    return _auth_headers(test_user)
