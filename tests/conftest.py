from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import Base, get_db
from app.main import app


def _memory_engine():
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


class FakeClock:
    """Deterministic clock: every call is one minute after the previous one."""

    def __init__(self, start=datetime(2025, 1, 5, 12, 0, tzinfo=timezone.utc)):
        self.current = start

    def __call__(self):
        now = self.current
        self.current = now + timedelta(minutes=1)
        return now


@pytest.fixture
def engine():
    engine = _memory_engine()
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def broken_engine():
    """An engine whose database has no tables, so every query fails."""
    engine = _memory_engine()
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def clock():
    return FakeClock()


def _override_get_db(factory):
    def _get_db():
        db = factory()
        try:
            yield db
        finally:
            db.close()
    return _get_db


@pytest.fixture
def override_db(session_factory):
    app.dependency_overrides[get_db] = _override_get_db(session_factory)
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def override_broken_db(broken_engine):
    factory = sessionmaker(autocommit=False, autoflush=False, bind=broken_engine)
    app.dependency_overrides[get_db] = _override_get_db(factory)
    yield
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(override_db):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def broken_client(override_broken_db):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


def naive_utc(value):
    """SQLite hands back naive datetimes; compare everything in naive UTC."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value
