"""Service test fixtures — async DB, caches with a fake clock, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - Caches use FakeClock: TTL expiry is simulated with clock.advance()
    - The app under test gets a container built around the test engine
    - CDN calls go to an httpx.MockTransport (never the network)

Design Decisions:
    - StaticPool: every session shares the one in-memory connection
    - bcrypt rounds=4 for fast password fixtures
"""

import httpx
import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from pressroom.config import Settings
from pressroom.container import build_container
from pressroom.db.base import Base
from pressroom.infrastructure.content_cache import ContentCache
from pressroom.infrastructure.database import DatabaseSessionManager
from pressroom.infrastructure.identity import SessionInfo
from pressroom.infrastructure.passwords import hash_password
from pressroom.main import create_app
from pressroom.models.user import User
import pressroom.models  # noqa: F401

TEST_PASSWORD = "correct horse"


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        session_secret="test-session-secret",
        cdn_image_base_url="https://img.cdn.test/",
        cdn_thumbnail_base_url="https://cdn.test/",
        cdn_upload_url="https://cdn.test/api/upload",
        cdn_upload_api_key="test-key",
        posts_per_page=2,
    )


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def db_manager(test_engine):
    return DatabaseSessionManager.from_engine(test_engine)


@pytest.fixture
def data_cache(clock):
    return ContentCache("data-cache", clock=clock)


@pytest.fixture
def page_cache(clock):
    return ContentCache("page-cache", clock=clock)


@pytest.fixture
def cdn_requests():
    """Requests seen by the mock CDN, plus the response it should return."""
    return {"log": [], "status": 200, "body": {
        "url": "https://img.cdn.test/abc.png",
        "thumb_url": "https://cdn.test/thumbnail/abc.png",
        "deletion_url": "https://cdn.test/delete/abc",
    }}


@pytest.fixture
async def http_client(cdn_requests):
    def handler(request: httpx.Request) -> httpx.Response:
        cdn_requests["log"].append(request)
        return httpx.Response(cdn_requests["status"], json=cdn_requests["body"])

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as c:
        yield c


@pytest.fixture
def container(settings, db_manager, http_client, data_cache, page_cache):
    return build_container(
        settings,
        db=db_manager,
        http_client=http_client,
        data_cache=data_cache,
        page_cache=page_cache,
    )


@pytest.fixture
async def client(container):
    """FastAPI test client wired to the test container."""
    app = create_app(container)
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
async def author(test_db):
    user = User(
        name="Sarah Engineer", email="sarah@example.com",
        password_hash=hash_password(TEST_PASSWORD, rounds=4),
    )
    test_db.add(user)
    await test_db.commit()
    await test_db.refresh(user)
    return user


@pytest.fixture
async def other_user(test_db):
    user = User(
        name="Mike Design", email="mike@example.com",
        password_hash=hash_password(TEST_PASSWORD, rounds=4),
    )
    test_db.add(user)
    await test_db.commit()
    await test_db.refresh(user)
    return user


@pytest.fixture
def author_session(author):
    return SessionInfo(user_id=author.id)


@pytest.fixture
def other_session(other_user):
    return SessionInfo(user_id=other_user.id)


@pytest.fixture
def auth_headers(container):
    """Build Authorization headers for a user."""
    def _headers(user) -> dict:
        return {"Authorization": f"Bearer {container.identity.issue(user.id)}"}
    return _headers


@pytest.fixture
def login(client):
    """Log in through the auth route; returns the raw response."""
    async def _login(email: str, password: str = TEST_PASSWORD):
        return await client.post(
            "/api/v1/auth/login", json={"email": email, "password": password},
        )
    return _login
