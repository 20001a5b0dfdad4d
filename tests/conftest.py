"""Pytest configuration and shared fixtures"""

import pytest
import pytest_asyncio
from typing import AsyncGenerator
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import NullPool

from chapter_site.main import app
from chapter_site.database import Base, get_db, get_session_factory
from chapter_site.utils.rate_limit import limiter
import chapter_site.models  # noqa: F401


@pytest_asyncio.fixture(scope="function")
async def test_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """File-backed SQLite engine; each content query opens its own connection"""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'site.db'}",
        echo=False,
        poolclass=NullPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker:
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture(autouse=True)
def disable_rate_limit():
    """Rate limiting is exercised explicitly in its own test"""
    limiter.enabled = False
    yield
    limiter.enabled = False
    limiter.reset()


@pytest.fixture
def override_dependencies(session_factory):
    """Point the app's database dependencies at the test database"""
    async def override_get_db():
        async with session_factory() as session:
            yield session
            await session.commit()

    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_db] = override_get_db
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client(override_dependencies):
    """FastAPI test client fixture"""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def add_rows(session_factory):
    """Insert model instances and return them with generated ids"""
    async def _add_rows(*rows):
        async with session_factory() as session:
            session.add_all(rows)
            await session.commit()
            for row in rows:
                await session.refresh(row)
        return rows

    return _add_rows
