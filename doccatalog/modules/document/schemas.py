"""Pydantic schemas for document entities."""

import uuid
from enum import Enum
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..common.schemas import TimestampSchema


class DocumentType(str, Enum):
    """Content type of a reference document. Values are wire-stable."""

    TDS = "TDS"
    ESR = "ESR"
    MSDS = "MSDS"
    LEED = "LEED"
    INSTALLATION = "Installation"
    WARRANTY = "Warranty"
    ACOUSTIC = "Acoustic"
    PART_SPEC = "PartSpec"


class DocumentBase(BaseModel):
    """Base schema for document data."""

    name: Annotated[str, Field(min_length=1, max_length=255, description="Display name")]
    description: Annotated[str, Field(max_length=1000, description="Document description")]
    filename: Annotated[str, Field(min_length=1, max_length=255, description="Original filename")]
    url: Annotated[str, Field(min_length=1, description="Public locator of the stored file")]
    size: Annotated[int, Field(gt=0, description="File size in bytes")]
    type: DocumentType
    required: bool = False
    products: Annotated[List[str], Field(min_length=1, description="Size variants the document applies to")]
    product_type: Annotated[str, Field(min_length=1, max_length=64, description="Product type tag")]


class DocumentCreateInternal(DocumentBase):
    """Record inserted by the upload pipeline once the file is stored."""

    model_config = ConfigDict(use_enum_values=True)

    storage_key: Annotated[str, Field(min_length=1, max_length=512)]


class DocumentUpdate(BaseModel):
    """Schema for a metadata-only update of an existing document."""

    model_config = ConfigDict(extra="forbid")

    name: Optional[Annotated[str, Field(min_length=1, max_length=255)]] = None
    description: Optional[Annotated[str, Field(max_length=1000)]] = None
    type: Optional[DocumentType] = None
    required: Optional[bool] = None
    products: Optional[Annotated[List[str], Field(min_length=1)]] = None
    product_type: Optional[Annotated[str, Field(min_length=1, max_length=64)]] = None

    @field_validator("name", "description", "type", "required", "products", "product_type", mode="before")
    @classmethod
    def reject_null(cls, value):
        """Omit a field to leave it unchanged; null is not a value for any column."""
        if value is None:
            raise ValueError("may not be null")
        return value


class DocumentRead(TimestampSchema, DocumentBase):
    """Schema for reading document data."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    storage_key: str


class MaterializedDocument(DocumentRead):
    """A document together with its file content, base64-encoded."""

    file_data: str = Field(description="Base64 encoding of the stored file")


class SkippedDocument(BaseModel):
    """A document left out of an export, and why."""

    id: uuid.UUID
    filename: str
    reason: str


class ExportReport(BaseModel):
    """Result of a batch export."""

    documents: List[MaterializedDocument] = Field(default_factory=list)
    skipped: List[SkippedDocument] = Field(default_factory=list)
