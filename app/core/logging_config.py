import logging

from app.core.config import settings

logger = logging.getLogger("splitledger")


def configure_logging(level: str | None = None):
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    logger.setLevel((level or settings.LOG_LEVEL).upper())
