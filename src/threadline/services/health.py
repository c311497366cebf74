import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

async def check_db(session: AsyncSession) -> bool:
    """Simple DB connectivity check.
    Uses a lightweight SELECT 1 statement and returns True if the DB responds.
    """
    try:
        await session.execute(text("SELECT 1"))
        return True
    except (SQLAlchemyError, OSError):
        logger.warning("database readiness check failed", exc_info=True)
        return False
