import asyncio
import logging
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from app.core.config import settings
from app.db.session import engine

logger = logging.getLogger("splitledger.db")


async def wait_for_db(retries=None):
    retries = retries or settings.DB_CONNECT_RETRIES
    for i in range(retries):
        try:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            logger.info("Database connected")
            return
        except (SQLAlchemyError, OSError):
            logger.warning("Database not ready | [ %d/%d ] → retrying...", i + 1, retries)
            await asyncio.sleep(2)

    raise RuntimeError("Database unreachable after retries")
