import os
import uuid
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession
from typing import AsyncGenerator

# Configure database for tests via settings module rather than hardcoding directly.
# Allow overriding with TEST_DATABASE_URL; fall back to a local sqlite file.
test_db_url = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite:///./tests/test.db")
os.environ.setdefault("DATABASE_URL", test_db_url)
os.environ.setdefault("AUTH_ENABLED", "false")

from threadline.core import config as _config  # noqa: E402
_config.get_settings.cache_clear()  # ensure new env vars are picked up # type: ignore[attr-defined]
_settings = _config.get_settings()

from threadline.api.main import app  # noqa: E402
from threadline.db.session import AsyncSessionLocal, engine, Base  # noqa: E402
import threadline.models  # noqa: E402,F401 register every table on Base.metadata
from threadline.models.user import User  # noqa: E402


@pytest_asyncio.fixture(autouse=True)
async def prepare_db():
    """Fresh schema for every test.

    The engine is disposed afterwards so no pooled connection outlives the
    event loop of the test that opened it.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture(scope="session")
def settings():
    """Expose application settings to tests if needed."""
    return _settings


@pytest_asyncio.fixture()
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:  # type: ignore
        yield session


@pytest_asyncio.fixture()
async def client():
    # httpx >=0.28 removed the 'app=' shortcut; use ASGITransport explicitly
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest_asyncio.fixture()
async def make_user():
    """Factory persisting a committed user; returns the User."""
    async def _make(username: str | None = None, **fields) -> User:
        name = username or f"user-{uuid.uuid4().hex[:8]}"
        user = User(
            username=name,
            fullname=fields.pop("fullname", name.title()),
            profile_picture=fields.pop("profile_picture", None),
            **fields,
        )
        async with AsyncSessionLocal() as session:  # type: ignore
            session.add(user)
            await session.commit()
        return user
    return _make


@pytest_asyncio.fixture()
async def user(make_user) -> User:
    return await make_user("author", fullname="Thread Author", profile_picture="https://cdn.test/a.png")


@pytest.fixture()
def auth_headers(user):
    return {"X-User-Id": str(user.id)}
