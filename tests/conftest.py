"""Shared fixtures: in-memory database, HTTP client and a signed-up user."""

import os

# Must be set before any app module reads settings
os.environ["SECRET"] = "test-secret-not-real"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["SHORT_URL_BASE"] = "https://short.ly"
os.environ["LOG_LEVEL"] = "WARNING"

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from auth.tokens import Identity, TokenCodec, get_token_codec
from database import Base, get_async_session
from main import app


@pytest_asyncio.fixture
async def db_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(db_engine):
    return async_sessionmaker(db_engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_maker):
    async with session_maker() as session:
        yield session


@pytest.fixture
def codec():
    return TokenCodec(secret="test-secret-not-real", lifetime_seconds=3600)


@pytest_asyncio.fixture
async def client(session_maker):
    async def override_session():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_async_session] = override_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def spy_codec(codec):
    """A codec whose calls can be inspected; it delegates to the real one."""
    spy = MagicMock(wraps=codec)
    spy.lifetime_seconds = codec.lifetime_seconds
    app.dependency_overrides[get_token_codec] = lambda: spy
    yield spy
    app.dependency_overrides.pop(get_token_codec, None)


@pytest.fixture
def identity():
    return Identity(
        user_id="0b7c8e52-3f0a-4c4e-9d7e-3c1f7a9e2b11",
        email="a@b.com",
        first_name="Ada",
        last_name="Byron",
    )


@pytest.fixture
def auth_headers(codec, identity):
    return {"Authorization": f"Bearer {codec.mint(identity)}"}


@pytest.fixture
def fixed_now():
    return datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)
