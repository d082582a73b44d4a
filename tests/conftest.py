"""
Pytest configuration and fixtures.

WHY: Fixtures provide reusable test setup/teardown logic, reducing
duplication and ensuring consistent test environments.
"""

import pytest
import pytest_asyncio
from typing import Any, AsyncGenerator, Dict
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool
from httpx import AsyncClient, ASGITransport

from records_api.main import app
from records_api.models.base import Base
from records_api.db.session import get_db
from records_api.services import email as email_module


# StaticPool keeps every connection on the same in-memory database.
TEST_ASYNC_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(scope="function")
async def db_engine():
    """
    Create a test database engine.

    WHY: Function scope gives each test a fresh database.
    """
    engine = create_async_engine(
        TEST_ASYNC_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """
    Create a test database session.

    Yields:
        AsyncSession: Database session for the test
    """
    async_session = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test HTTP client bound to the test session.

    Yields:
        AsyncClient: HTTP client for making test requests
    """

    async def override_get_db():
        """Override database dependency with test session."""
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def sample_record_data() -> Dict[str, Any]:
    """Body for creating a sample record."""
    return {"param": "alpha", "name": "Widget", "color": "blue"}


@pytest.fixture
def contact_submission() -> Dict[str, Any]:
    """Body for POST /sample."""
    return {
        "data": {
            "name": "Ada Lovelace",
            "email": "ada@example.com",
            "message": "Please get in touch.",
        }
    }


@pytest.fixture(autouse=True)
def use_mock_email_provider(monkeypatch):
    """
    Use mock email provider for all tests.

    WHY: Tests should not send real emails. The shared EmailService is
    reset so it is rebuilt with the mock provider, and the mock's sent
    list starts empty.
    """
    from records_api.core import config

    monkeypatch.setattr(config.settings, "RESEND_API_KEY", None)
    monkeypatch.setattr(email_module, "_email_service", None)
    email_module.MockEmailProvider.clear_sent_emails()

    yield

    email_module.MockEmailProvider.clear_sent_emails()
