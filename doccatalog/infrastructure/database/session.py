from typing import Any, AsyncGenerator, Dict

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, MappedAsDataclass

from ..config.settings import settings


def _engine_options(database_url: str) -> Dict[str, Any]:
    """Pool options only apply to server databases."""
    if database_url.startswith("sqlite"):
        return {}
    return {
        "pool_size": settings.POSTGRES_POOL_SIZE,
        "max_overflow": settings.POSTGRES_MAX_OVERFLOW,
    }


engine = create_async_engine(
    settings.DATABASE_URL,
    echo=False,
    future=True,
    **_engine_options(settings.DATABASE_URL),
)

local_session = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


class Base(DeclarativeBase, MappedAsDataclass):
    """Base class for all database models.

    Combines SQLAlchemy's DeclarativeBase with MappedAsDataclass so that
    every model gets a generated ``__init__``/``__repr__`` from its
    mapped columns.

    Example:
        ```python
        class Category(Base):
            __tablename__ = "categories"

            id: Mapped[int] = mapped_column(Integer, primary_key=True, init=False)
            name: Mapped[str] = mapped_column(String(255), unique=True)

        category = Category(name="Subfloor")
        ```
    """

    pass


async def async_session() -> AsyncGenerator[AsyncSession, None]:
    """Dependency for database session management with proper lifecycle.

    Yields:
        AsyncSession: A configured async database session.

    Example:
        ```python
        @router.get("/documents/")
        async def list_documents(db: AsyncSession = Depends(async_session)):
            ...
        ```
    """
    async_get_db = local_session
    async with async_get_db() as db:
        yield db


async def create_tables() -> None:
    """Create all tables in the database if they don't exist.

    Idempotent: existing tables are left unchanged. Production deployments
    should manage the schema with migrations instead.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
