# scripts/reset_db.py

import asyncio

from loguru import logger

from trubalance.core.db import engine
import trubalance.infrastructure.db.models  # noqa: F401  registers tables on Base
from trubalance.infrastructure.db.base import Base


async def reset_db():
    logger.info("Resetting schema (drop_all + create_all)...")

    async with engine.begin() as conn:
        logger.info("Dropping all tables...")
        await conn.run_sync(Base.metadata.drop_all)

        logger.info("Creating all tables from current models...")
        await conn.run_sync(Base.metadata.create_all)

    await engine.dispose()
    logger.success("DB reset complete: invoice_counters recreated.")


if __name__ == "__main__":
    asyncio.run(reset_db())
