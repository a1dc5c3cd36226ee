# backend/app/db/init_db.py
import logging

from backend.app.db.base import Base, engine

# Import models so Base.metadata knows every table
from backend.app import models  # noqa: F401

logger = logging.getLogger(__name__)


async def init_models(drop: bool = False) -> None:
    """Create all tables. With drop=True the existing tables are removed first."""
    async with engine.begin() as conn:
        if drop:
            await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ready (%s)", ", ".join(sorted(Base.metadata.tables)))
