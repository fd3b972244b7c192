"""
Meigen Backend — Test Configuration (conftest.py)
=================================================

Fixture Hierarchy (all function-scoped):
    ├── engine:           fresh in-memory SQLite with every table created
    ├── db_session:       AsyncSession on that engine (service tests)
    ├── catalogue:        偉人 / 哲学者 / ソクラテス / 無知の知 and friends
    ├── test_client:      httpx AsyncClient on a fresh app, sessions bound
    │                     to `engine` through a dependency override
    ├── admin_client:     test_client already logged in
    └── mock_db_session:  AsyncMock session for pure unit tests

Each test gets its own engine, so nothing leaks between tests. Each
test_client gets its own app, so the login rate limiter starts empty.
"""

import os

# Settings are read at import time; set them before importing meigen
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["ADMIN_PASSWORD"] = "test-admin-password"
os.environ["CRON_SECRET"] = "test-cron-secret"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["LOGIN_RATE_LIMIT_ATTEMPTS"] = "1000"

from types import SimpleNamespace
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import meigen.models  # noqa: F401
from meigen.config import settings
from meigen.database import Base, enable_sqlite_pragmas, get_db_session
from meigen.services.catalog_service import (
    author_service,
    category_service,
    subcategory_service,
)
from meigen.services.quote_service import quote_service

ADMIN_PASSWORD = "test-admin-password"
CRON_SECRET = "test-cron-secret"


# ══════════════════════════════════════════════════════════════════════════
# Database
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def engine():
    """In-memory SQLite shared by every connection of this test (StaticPool)."""
    eng = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_pragmas(eng, wal=False)
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def catalogue(db_session):
    """
    A small committed catalogue:

        偉人 / 哲学者 / ソクラテス   "The only true wisdom..." (textJa 無知の知...)
        偉人 / 科学者 / アインシュタイン  "Imagination is more important..."
        ビジネス / 起業家 / スティーブ・ジョブズ  "Stay hungry, stay foolish."
    """
    great = await category_service.create(db_session, {"name": "偉人"})
    business = await category_service.create(db_session, {"name": "ビジネス"})
    philosophers = await subcategory_service.create(
        db_session, {"category_id": great.id, "name": "哲学者"}
    )
    scientists = await subcategory_service.create(
        db_session, {"category_id": great.id, "name": "科学者"}
    )
    founders = await subcategory_service.create(
        db_session, {"category_id": business.id, "name": "起業家"}
    )
    socrates = await author_service.create(db_session, {"name": "ソクラテス"})
    einstein = await author_service.create(db_session, {"name": "アインシュタイン"})
    jobs = await author_service.create(db_session, {"name": "スティーブ・ジョブズ"})

    wisdom = await quote_service.create(db_session, {
        "text": "The only true wisdom is in knowing you know nothing.",
        "text_ja": "無知の知こそが真の知恵である。",
        "author_id": socrates.id,
        "subcategory_id": philosophers.id,
    })
    imagination = await quote_service.create(db_session, {
        "text": "Imagination is more important than knowledge.",
        "text_ja": "想像力は知識よりも重要である。",
        "author_id": einstein.id,
        "subcategory_id": scientists.id,
    })
    hungry = await quote_service.create(db_session, {
        "text": "Stay hungry, stay foolish.",
        "text_ja": "ハングリーであれ。愚か者であれ。",
        "author_id": jobs.id,
        "subcategory_id": founders.id,
    })
    await db_session.commit()

    return SimpleNamespace(
        great=great,
        business=business,
        philosophers=philosophers,
        scientists=scientists,
        founders=founders,
        socrates=socrates,
        einstein=einstein,
        jobs=jobs,
        wisdom=wisdom,
        imagination=imagination,
        hungry=hungry,
    )


# ══════════════════════════════════════════════════════════════════════════
# HTTP
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    AsyncClient on a fresh app whose get_db_session uses the test engine.

    The override keeps the real dependency's commit/rollback behaviour.
    """
    from meigen.main import create_app

    app = create_app()

    async def override_get_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def admin_client(test_client):
    response = await test_client.post("/api/login", json={"password": ADMIN_PASSWORD})
    assert response.status_code == 200
    test_client.cookies.set(
        settings.session_cookie_name,
        response.cookies[settings.session_cookie_name],
    )
    return test_client


# ══════════════════════════════════════════════════════════════════════════
# Mocks
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """AsyncMock standing in for AsyncSession in tests that never touch SQL."""
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.delete = AsyncMock()
    session.add = MagicMock()
    return session
