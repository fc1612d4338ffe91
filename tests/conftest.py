"""Shared fixtures: an in-memory SQLite store and an in-process HTTP client."""
import os

# Must be set before core.database builds its module-level engine
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("DB_CREATE_TABLES", "false")

import httpx
import pytest
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from core import database
from core.database import build_session_factory, init_db


@pytest.fixture
async def engine():
    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await init_db(test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine, monkeypatch):
    factory = build_session_factory(engine)
    monkeypatch.setattr(database, "async_session_factory", factory)
    return factory


@pytest.fixture
async def session(session_factory):
    async with session_factory() as s:
        yield s


@pytest.fixture
async def client(session_factory):
    from api.main import app

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c


@pytest.fixture
def dune() -> dict:
    return {
        "title": "Dune",
        "author": "Herbert",
        "isbn": "9780441013593",
        "price": 12.99,
        "genre": "SciFi",
    }
