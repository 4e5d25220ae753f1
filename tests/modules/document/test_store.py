"""Tests for the SQLAlchemy metadata store."""

import uuid
from datetime import UTC, datetime

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from doccatalog.infrastructure.database.session import Base
from doccatalog.modules.common.exceptions import MetadataError
from doccatalog.modules.document.schemas import DocumentCreateInternal, DocumentType
from doccatalog.modules.document.store import SQLAlchemyMetadataStore


def _record(filename: str = "XYZ-TDS-2023.pdf", product_type: str = "subfloor") -> DocumentCreateInternal:
    key = f"1700000000000-abcdefghi-{filename}"
    return DocumentCreateInternal(
        name="Technical Data Sheet",
        description="TDS Document",
        filename=filename,
        url=f"http://test/files/{key}",
        storage_key=key,
        size=2048,
        type=DocumentType.TDS,
        required=False,
        products=["1/2-in (13mm)", "5/8-in (16mm)"],
        product_type=product_type,
    )


@pytest.fixture
def metadata_store(db_session: AsyncSession) -> SQLAlchemyMetadataStore:
    return SQLAlchemyMetadataStore(db_session)


@pytest.mark.asyncio
async def test_insert_and_get(metadata_store):
    """Test that an inserted record reads back unchanged."""
    created = await metadata_store.insert(_record())

    assert isinstance(created.id, uuid.UUID)
    assert created.created_at is not None

    fetched = await metadata_store.get_by_id(created.id)
    assert fetched is not None
    assert fetched.id == created.id
    assert fetched.type == DocumentType.TDS
    assert fetched.products == ["1/2-in (13mm)", "5/8-in (16mm)"]
    assert fetched.storage_key == "1700000000000-abcdefghi-XYZ-TDS-2023.pdf"


@pytest.mark.asyncio
async def test_get_missing(metadata_store):
    assert await metadata_store.get_by_id(uuid.uuid4()) is None


@pytest.mark.asyncio
async def test_update(metadata_store):
    created = await metadata_store.insert(_record())

    assert await metadata_store.update(created.id, {"name": "Renamed", "products": ["3/4-in (20mm)"]}) is True

    fetched = await metadata_store.get_by_id(created.id)
    assert fetched.name == "Renamed"
    assert fetched.products == ["3/4-in (20mm)"]


@pytest.mark.asyncio
async def test_update_missing(metadata_store):
    assert await metadata_store.update(uuid.uuid4(), {"name": "x"}) is False


@pytest.mark.asyncio
async def test_delete(metadata_store):
    created = await metadata_store.insert(_record())

    assert await metadata_store.delete(created.id) is True
    assert await metadata_store.get_by_id(created.id) is None
    assert await metadata_store.delete(created.id) is False


@pytest.mark.asyncio
async def test_list_filters_and_orders_newest_first(metadata_store):
    """Test product type filtering and created_at descending order."""
    older = await metadata_store.insert(_record("a.pdf"))
    newer = await metadata_store.insert(_record("b.pdf"))
    other = await metadata_store.insert(_record("c.pdf", product_type="structural-floor"))

    await metadata_store.update(older.id, {"created_at": datetime(2024, 1, 1, tzinfo=UTC)})
    await metadata_store.update(newer.id, {"created_at": datetime(2024, 6, 1, tzinfo=UTC)})
    await metadata_store.update(other.id, {"created_at": datetime(2024, 3, 1, tzinfo=UTC)})

    subfloor = await metadata_store.list("subfloor")
    assert [d.id for d in subfloor] == [newer.id, older.id]

    everything = await metadata_store.list()
    assert [d.id for d in everything] == [newer.id, other.id, older.id]


@pytest.mark.asyncio
async def test_list_unknown_product_type(metadata_store):
    await metadata_store.insert(_record())

    assert await metadata_store.list("nonexistent") == []


@pytest.mark.asyncio
async def test_backend_failure_raises_metadata_error(test_db_engine, db_session):
    """Test that database failures surface as MetadataError."""
    metadata_store = SQLAlchemyMetadataStore(db_session)
    async with test_db_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    with pytest.raises(MetadataError):
        await metadata_store.insert(_record())
