"""SQLAlchemy models for document entities."""

from typing import List

from sqlalchemy import JSON, Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from ...infrastructure.database.models import TimestampMixin, UUIDMixin
from ...infrastructure.database.session import Base


class Document(Base, UUIDMixin, TimestampMixin):
    """Metadata record of an uploaded reference document.

    The file itself lives in the blob store under ``storage_key`` and is
    publicly reachable at ``url``. Records are only created by the upload
    pipeline, after the blob has been written.
    """

    __tablename__ = "documents"

    name: Mapped[str] = mapped_column(String(255), index=True)
    description: Mapped[str] = mapped_column(String(1000))
    filename: Mapped[str] = mapped_column(String(255))
    url: Mapped[str] = mapped_column(String(2048))
    storage_key: Mapped[str] = mapped_column(String(512))
    size: Mapped[int] = mapped_column(Integer)
    type: Mapped[str] = mapped_column(String(32), index=True)
    product_type: Mapped[str] = mapped_column(String(64), index=True)
    products: Mapped[List[str]] = mapped_column(JSON, default_factory=list)
    required: Mapped[bool] = mapped_column(Boolean, default=False)
