"""
Database table creation script.

Creates all tables defined in ORM models using SQLAlchemy metadata.

Dependencies: sqlalchemy, linkshelf.configs
System role: Database schema initialization

Usage:
    python -m linkshelf.boundary.db.create_tables
"""

import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncEngine

from linkshelf.boundary.db.base import Base
from linkshelf.boundary.db.connection import get_async_engine

# Import all models to register them with Base.metadata
from linkshelf.boundary.db.models.document_model import DocumentModel  # noqa: F401
from linkshelf.configs import get_settings
from linkshelf.observability.logger import configure_logging

logger = logging.getLogger(__name__)


async def create_all_tables(engine: AsyncEngine | None = None) -> None:
    """
    Create all database tables from registered ORM models.

    Idempotent: calls CREATE TABLE IF NOT EXISTS for each model, so safe
    to run multiple times. Existing tables remain unchanged.

    Args:
        engine: Engine to use (a new one from settings if None)

    Raises:
        SQLAlchemyError: If database connection fails or table creation fails
    """
    engine = engine or get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"{__name__}:create_all_tables - All tables created successfully")



async def main() -> None:
    """Configure logging from settings and create the tables."""
    configure_logging(get_settings().log_level)
    engine = get_async_engine()
    try:
        await create_all_tables(engine)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
