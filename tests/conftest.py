"""Test fixtures: a fresh in-memory database per test.

Environment is set before anything from immy is imported, since the
settings singleton and the app's engine are built at import time.
Each test gets its own SQLite engine (StaticPool keeps the single
in-memory connection alive) with the schema created, and the app's
get_db dependency is overridden to hand out that session.
"""

import os

os.environ.setdefault("IMMY_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("IMMY_JWT_SECRET", "test-secret-key-that-is-at-least-32-bytes")
os.environ.setdefault("IMMY_LOG_JSON", "false")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from immy.db.engine import get_db
from immy.db.models import Base
from immy.main import app


@pytest.fixture(autouse=True)
def fast_bcrypt(monkeypatch):
    """Minimum bcrypt work factor so registration-heavy tests stay fast."""
    monkeypatch.setattr("immy.auth.password.BCRYPT_ROUNDS", 4)


@pytest_asyncio.fixture()
async def db_session():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session = AsyncSession(bind=engine, expire_on_commit=False)
    try:
        yield session
    finally:
        await session.close()
        await engine.dispose()


@pytest_asyncio.fixture()
async def client(db_session):
    """HTTP client against the app, sharing the test's session.

    Auth is NOT overridden: tests go through the real token pipeline.
    """
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


