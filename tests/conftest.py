"""Test configuration and fixtures for the document catalog."""

import os
import tempfile

# Must be set before the application modules read their settings.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["ENVIRONMENT"] = "local"
os.environ["CREATE_TABLES_ON_STARTUP"] = "false"
os.environ["BLOB_STORAGE_PATH"] = tempfile.mkdtemp(prefix="doccatalog-blobs-")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from doccatalog.infrastructure.database.session import Base, async_session
from doccatalog.infrastructure.logging import configure_testing_logging
from doccatalog.infrastructure.storage import LocalBlobStore, get_blob_store
from doccatalog.interfaces.main import app

from .helpers import TEST_PUBLIC_BASE_URL, InMemoryBlobStore, InMemoryMetadataStore, make_pdf


@pytest.fixture(autouse=True, scope="session")
def quiet_logging():
    """Keep test output free of application log noise."""
    configure_testing_logging()


@pytest_asyncio.fixture(scope="function")
async def test_db_engine():
    """Create an in-memory SQLite engine with all tables."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
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


@pytest_asyncio.fixture(scope="function")
async def db_session(test_db_engine):
    """Create a test database session."""
    session_factory = async_sessionmaker(test_db_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest.fixture
def pdf_bytes() -> bytes:
    return make_pdf()


@pytest.fixture
def local_blob_store(tmp_path) -> LocalBlobStore:
    """Filesystem blob store rooted in a per-test temporary directory."""
    return LocalBlobStore(root=tmp_path / "blobs", public_base_url=TEST_PUBLIC_BASE_URL)


@pytest.fixture
def memory_blob_store() -> InMemoryBlobStore:
    return InMemoryBlobStore()


@pytest.fixture
def memory_metadata_store() -> InMemoryMetadataStore:
    return InMemoryMetadataStore()


@pytest_asyncio.fixture(scope="function")
async def client(test_db_engine, local_blob_store):
    """Create a test client backed by the in-memory database and a temporary blob store."""
    app.dependency_overrides = {}

    test_session_factory = async_sessionmaker(test_db_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db():
        """Each request gets its own database session."""
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[async_session] = override_get_db
    app.dependency_overrides[get_blob_store] = lambda: local_blob_store

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides = {}
