"""Create the prices table. Safe to run on every deploy.

    python -m portfolio_tracker.init_db
"""

import asyncio
import logging
import sys

from portfolio_tracker.config import LOG_LEVEL
from portfolio_tracker.database import engine, init_db
from portfolio_tracker.errors import SchemaConflictError

logger = logging.getLogger("portfolio_tracker.init_db")


async def _run() -> int:
    try:
        await init_db(engine)
    except SchemaConflictError as e:
        logger.error(str(e))
        return 1
    finally:
        await engine.dispose()
    logger.info("prices table ready")
    return 0


def main() -> int:
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    return asyncio.run(_run())


if __name__ == "__main__":
    sys.exit(main())
