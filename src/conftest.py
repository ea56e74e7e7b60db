from contextlib import asynccontextmanager

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from src.auth.session import create_session_token
from src.config.settings import settings
from src.main import app
from src.models.base import BaseModel
from src.participants.dtos import ParticipantDTO

# Register every table on BaseModel.metadata
import src.participants.repository.orm_models  # noqa: F401
import src.wishes.repository.orm_models  # noqa: F401

TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture
async def db_session():
    """A fresh in-memory database per test, shared by the SQL models through session_overwrite."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.create_all)

    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def client_factory():
    """
    Build an AsyncClient against the app with dependency overrides installed.
    Overrides are removed when the client context exits.
    """

    @asynccontextmanager
    async def factory(overrides: dict | None = None, cookies: dict | None = None):
        app.dependency_overrides.update(overrides or {})
        transport = ASGITransport(app=app)
        try:
            async with AsyncClient(transport=transport, base_url="http://test", cookies=cookies) as client:
                yield client
        finally:
            app.dependency_overrides.clear()

    return factory


@pytest.fixture
def session_cookies():
    """Cookies of a logged-in participant or organizer."""

    def make(participant: ParticipantDTO) -> dict[str, str]:
        return {settings.session_cookie_name: create_session_token(participant)}

    return make
