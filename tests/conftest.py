"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory database session, sample records, store/collaborator mocks
Dependencies: pytest, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from linkshelf.core.exceptions import DocumentNotFoundError
from linkshelf.core.ingestion.configs import IngestionSettings
from linkshelf.core.ingestion.models import ProcessedContent
from linkshelf.models.document import DocumentRecord


@pytest.fixture
async def test_async_db():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        AsyncSession: Test database session with cleanup (lazy imported to avoid settings issues)
    """
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
    from sqlalchemy.pool import StaticPool

    from linkshelf.boundary.db.base import Base
    from linkshelf.boundary.db.models import DocumentModel  # noqa: F401

    # Use SQLite in-memory database for tests
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()

    # Cleanup
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


def make_record(url: str = "https://example.com/article", **overrides) -> DocumentRecord:
    """Build a DocumentRecord with sensible defaults."""
    document_id = overrides.pop("id", str(uuid.uuid4()))
    values = {
        "id": document_id,
        "url": url,
        "created_at": datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc),
        "bucket_path": f"content/{document_id}.html",
        "content_type": "text/html",
        "size": 1234,
        "title": "Example article",
        "summary": "An example article about examples.",
        "chunk_count": 3,
    }
    values.update(overrides)
    return DocumentRecord(**values)


@pytest.fixture
def sample_record() -> DocumentRecord:
    """Provide a stored document record."""
    return make_record()


@pytest.fixture
def record_factory():
    """Provide the make_record builder to tests."""
    return make_record


@pytest.fixture
def ingestion_settings() -> IngestionSettings:
    """Provide ingestion settings independent of the environment."""
    return IngestionSettings(embedding_concurrency=1)


@pytest.fixture
def mock_metadata_store() -> AsyncMock:
    """
    Create mock metadata store that knows no URLs.

    Returns:
        AsyncMock: find_by_url/delete_by_url raise DocumentNotFoundError by default
    """
    store = AsyncMock()
    store.find_by_url = AsyncMock(side_effect=lambda url: _raise_not_found(url))
    store.delete_by_url = AsyncMock(side_effect=lambda url: _raise_not_found(url))
    store.save = AsyncMock(return_value=None)
    store.get_by_id = AsyncMock(return_value=None)
    store.list_recent = AsyncMock(return_value=[])
    return store


def _raise_not_found(url: str):
    raise DocumentNotFoundError(url=url)


@pytest.fixture
def mock_blob_store() -> AsyncMock:
    """Create mock blob store."""
    store = AsyncMock()
    store.put = AsyncMock(return_value=None)
    store.delete = AsyncMock(return_value=None)
    return store


@pytest.fixture
def mock_vector_store() -> AsyncMock:
    """Create mock vector store."""
    store = AsyncMock()
    store.insert = AsyncMock(return_value=None)
    store.query = AsyncMock(return_value=[])
    store.delete_by_document = AsyncMock(return_value=None)
    return store


@pytest.fixture
def mock_fetcher() -> AsyncMock:
    """Create mock fetcher returning a small HTML page."""
    fetcher = AsyncMock()
    fetcher.fetch = AsyncMock(return_value=(b"<html><body>hello</body></html>", "text/html"))
    return fetcher


@pytest.fixture
def mock_summarizer() -> AsyncMock:
    """Create mock summarizer returning three chunks."""
    summarizer = AsyncMock()
    summarizer.process = AsyncMock(
        return_value=ProcessedContent(
            title="Hello",
            summary="A page that says hello.",
            chunks=["chunk zero", "chunk one", "chunk two"],
        )
    )
    return summarizer


@pytest.fixture
def mock_embedder() -> AsyncMock:
    """Create mock embedder returning a vector derived from the text length."""
    embedder = AsyncMock()
    embedder.embed = AsyncMock(side_effect=lambda text: [float(len(text)), 0.0, 1.0])
    return embedder
