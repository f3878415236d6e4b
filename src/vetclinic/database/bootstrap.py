import logging

from sqlalchemy.ext.asyncio import AsyncEngine

from vetclinic.database.base import Base
import vetclinic.models  # noqa: F401 - registers every table on Base.metadata

logger = logging.getLogger(__name__)


async def create_tables(engine: AsyncEngine) -> None:
    """
    Create every table that does not exist yet. Safe to run on every startup:
    existing tables are left untouched.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all, checkfirst=True)

    logger.info("db.bootstrap.done", extra={"tables": sorted(Base.metadata.tables)})
