"""Metadata store capability and its SQLAlchemy implementation."""

import uuid
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, cast

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..common.exceptions import MetadataError
from .crud import document_crud
from .schemas import DocumentCreateInternal, DocumentRead


class MetadataStore(ABC):
    """Structured persistence for document records.

    Write operations raise ``MetadataError`` when the backend fails.
    A missing record is reported through the return value, never as an
    error.
    """

    @abstractmethod
    async def insert(self, record: DocumentCreateInternal) -> DocumentRead:
        """Persist a new record and return it with its assigned id and timestamps."""
        pass

    @abstractmethod
    async def update(self, document_id: uuid.UUID, changes: Dict[str, Any]) -> bool:
        """Apply ``changes`` to a record. Returns False if it does not exist."""
        pass

    @abstractmethod
    async def delete(self, document_id: uuid.UUID) -> bool:
        """Delete a record. Returns False if it does not exist."""
        pass

    @abstractmethod
    async def get_by_id(self, document_id: uuid.UUID) -> Optional[DocumentRead]:
        pass

    @abstractmethod
    async def list(self, product_type: Optional[str] = None) -> List[DocumentRead]:
        """All records, optionally only those of one product type, newest first."""
        pass


class SQLAlchemyMetadataStore(MetadataStore):
    """Metadata store over the ``documents`` table, bound to one session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _fail(self, action: str, error: SQLAlchemyError) -> MetadataError:
        await self.db.rollback()
        return MetadataError(f"Failed to {action} document metadata: {error}")

    async def insert(self, record: DocumentCreateInternal) -> DocumentRead:
        try:
            created = cast(Any, await document_crud.create(db=self.db, object=record))
        except SQLAlchemyError as e:
            raise await self._fail("save", e) from e

        return DocumentRead.model_validate(created, from_attributes=True)

    async def update(self, document_id: uuid.UUID, changes: Dict[str, Any]) -> bool:
        try:
            if not await document_crud.exists(db=self.db, id=document_id):
                return False
            await document_crud.update(db=self.db, object=changes, id=document_id)
        except SQLAlchemyError as e:
            raise await self._fail("update", e) from e

        return True

    async def delete(self, document_id: uuid.UUID) -> bool:
        try:
            if not await document_crud.exists(db=self.db, id=document_id):
                return False
            await document_crud.delete(db=self.db, id=document_id)
        except SQLAlchemyError as e:
            raise await self._fail("delete", e) from e

        return True

    async def get_by_id(self, document_id: uuid.UUID) -> Optional[DocumentRead]:
        try:
            row = await document_crud.get(db=self.db, id=document_id)
        except SQLAlchemyError as e:
            raise await self._fail("load", e) from e

        if not row:
            return None
        return DocumentRead.model_validate(row, from_attributes=True)

    async def list(self, product_type: Optional[str] = None) -> List[DocumentRead]:
        filters: Dict[str, Any] = {}
        if product_type is not None:
            filters["product_type"] = product_type

        try:
            stmt = await document_crud.select(sort_columns="created_at", sort_orders="desc", **filters)
            result = await self.db.execute(stmt)
            rows = result.mappings().all()
        except SQLAlchemyError as e:
            raise await self._fail("list", e) from e

        return [DocumentRead.model_validate(dict(row)) for row in rows]
