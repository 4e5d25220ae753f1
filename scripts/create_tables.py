"""Script to create database tables from SQLAlchemy models."""

import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from doccatalog.infrastructure.database.session import create_tables  # noqa: E402
from doccatalog.infrastructure.logging import get_logger, setup_logging_configuration  # noqa: E402
from doccatalog.modules.category import models as category_models  # noqa: E402,F401
from doccatalog.modules.document import models as document_models  # noqa: E402,F401

logger = get_logger(__name__)


async def main() -> None:
    """Create database tables."""
    setup_logging_configuration()
    logger.info("Creating database tables...")

    try:
        await create_tables()
        logger.info("✅ Database tables created successfully!")
    except Exception as e:
        logger.error(f"❌ Error creating database tables: {str(e)}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
