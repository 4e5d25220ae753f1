import uuid as uuid_pkg
from datetime import UTC, datetime

from sqlalchemy import DateTime, Uuid
from sqlalchemy.orm import Mapped, MappedAsDataclass, mapped_column


class UUIDMixin(MappedAsDataclass):
    """Mixin to add an opaque UUID primary key to database models.

    The identifier is generated client-side with ``uuid4()`` when the row is
    created, so it is known before the INSERT is flushed. It is excluded
    from dataclass initialization (``init=False``) to prevent manual
    assignment.

    Uses the generic ``Uuid`` type: native ``UUID`` on PostgreSQL,
    ``CHAR(32)`` on SQLite.

    Attributes:
        id: The UUID primary key field with automatic generation.
    """

    id: Mapped[uuid_pkg.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default_factory=uuid_pkg.uuid4,
        init=False,
    )


class TimestampMixin(MappedAsDataclass):
    """Mixin for adding created_at and updated_at timestamp columns.

    Both timestamps are timezone-aware UTC values set when the record is
    created. ``updated_at`` is refreshed by the services on every
    metadata update; nothing in the database does it automatically.

    Attributes:
        created_at: Timestamp when the record was created.
        updated_at: Timestamp when the record was last updated.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default_factory=lambda: datetime.now(UTC),
        nullable=False,
        index=True,
        init=False,
    )

    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        default_factory=lambda: datetime.now(UTC),
        nullable=True,
        init=False,
    )
