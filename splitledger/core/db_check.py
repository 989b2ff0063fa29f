import asyncio
import logging
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from splitledger.db.session import Base, engine

logger = logging.getLogger(__name__)


async def wait_for_db(retries=5, delay=2.0):
    for i in range(retries):
        try:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            logger.info("Database connected")
            return
        except (SQLAlchemyError, OSError):
            logger.warning("Database not ready | [ %d/%d ] -> retrying...", i + 1, retries)
            await asyncio.sleep(delay)

    raise RuntimeError("Database unreachable after retries")


async def create_schema():
    # imported for table registration on Base.metadata
    import splitledger.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Schema ensured")
