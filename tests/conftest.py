"""Shared fixtures: in-memory SQLite store and an in-process HTTP client."""

import os

# Must be set before app modules build their settings and engine
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ENV_MODE"] = "development"
os.environ["DEBUG"] = "false"

import httpx
import pytest

from app.database import Base, async_session_maker, engine
from app.main import app as api


@pytest.fixture(autouse=True)
async def database():
    """Fresh schema per test; disposing drops the in-memory database."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    await engine.dispose()


@pytest.fixture
async def session(database):
    async with async_session_maker() as session:
        yield session


@pytest.fixture
async def client(database):
    transport = httpx.ASGITransport(app=api, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def register_payload():
    def build(**overrides):
        payload = {
            "username": "alice",
            "email": "a@x.com",
            "usertype": "customer",
            "password": "pw123",
        }
        payload.update(overrides)
        return payload
    return build
