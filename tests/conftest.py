"""Pytest configuration and shared fixtures.

Provides common fixtures and configuration for all test modules.
"""

import base64
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from agents.email_summarizer import EmailSummarizer
from config import Settings
from db.base import Base
from db.session import get_db
from ingestion.pipeline import IngestionPipeline
from main import create_app
from models.providers.mock import MockLLM
from security.verifiers import BasicAuthVerifier

WEBHOOK_USERNAME = "postmark"
WEBHOOK_PASSWORD = "s3cret:with-colon"

STUB_SUMMARY = {"summary": "Meeting proposed for Friday.", "labels": ["scheduling"]}


def _basic_auth(username: str, password: str) -> dict:
    token = base64.b64encode(f"{username}:{password}".encode()).decode()
    return {"Authorization": f"Basic {token}"}


@pytest.fixture
def make_basic_auth():
    """Build an Authorization header for arbitrary credentials."""
    return _basic_auth


@pytest.fixture
def auth_headers():
    """Valid Basic auth header for the test webhook credentials."""
    return _basic_auth(WEBHOOK_USERNAME, WEBHOOK_PASSWORD)


@pytest.fixture
def test_settings():
    """Create test-specific settings."""
    return Settings(
        app_env="test",
        log_level="ERROR",  # Reduce noise in tests
        database_url_override="sqlite+aiosqlite:///:memory:",
        webhook_auth_mode="basic",
        webhook_username=WEBHOOK_USERNAME,
        webhook_password=WEBHOOK_PASSWORD,
        mock_llm_responses=True,  # Don't hit real LLM APIs in tests
    )


@pytest_asyncio.fixture
async def async_engine():
    """Create an in-memory async SQLite engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session(async_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session for testing."""
    async_session = async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()


@pytest.fixture
def stub_llm():
    """Offline LLM returning a fixed summary and records every call."""
    return MockLLM(response=dict(STUB_SUMMARY))


@pytest.fixture
def summarizer(stub_llm):
    """EmailSummarizer backed by the stub LLM."""
    return EmailSummarizer(stub_llm)


@pytest.fixture
def pipeline(summarizer):
    """Ingestion pipeline using Basic auth and the stub summarizer."""
    return IngestionPipeline(
        verifier=BasicAuthVerifier(WEBHOOK_USERNAME, WEBHOOK_PASSWORD),
        summarizer=summarizer,
    )


@pytest.fixture
def app(test_settings, session, pipeline):
    """FastAPI app wired to the test session and stub pipeline."""
    app = create_app(test_settings)
    app.state.ingestion_pipeline = pipeline

    async def override_get_db():
        yield session

    app.dependency_overrides[get_db] = override_get_db
    yield app
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client talking to the app in-process."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


# --- Test Data Factories ---


@pytest.fixture
def postmark_payload():
    """Inbound email in the provider's canonical naming."""
    return {
        "MessageID": "73e6d360-66eb-11e1-8e72-a8904824019b",
        "Subject": "Lunch on Friday?",
        "From": "alice@example.com",
        "To": "inbox@example.com",
        "Date": "Fri, 1 Mar 2024 09:30:00 +0000",
        "TextBody": "Are you free for lunch on Friday?",
        "Attachments": [
            {
                "Name": "menu.pdf",
                "ContentType": "application/pdf",
                "ContentLength": 2048,
                "ContentID": "",
                "Content": "JVBERi0xLjQK",
            }
        ],
        "MessageStream": "inbound",
    }


@pytest.fixture
def simple_payload():
    """Inbound email using the lowercase field naming."""
    return {
        "id": "m1",
        "subject": "Hi",
        "from": "a@x.com",
        "to": "b@x.com",
        "date": "2024-01-01",
        "body": "Let's meet Friday.",
    }
