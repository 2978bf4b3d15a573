import logging
from typing import Optional

from tortoise import Tortoise

from studel.core.config import DB_URL, GENERATE_SCHEMAS, LOG_LEVEL

log = logging.getLogger(__name__)

# Set logging level for Tortoise ORM
logging.getLogger("tortoise").setLevel(LOG_LEVEL)

# Define all models modules for the ORM
MODELS_MODULES = [
    "studel.models.order",
    "studel.models.catalog",
    "studel.models.user",
]


async def init_db(db_url: Optional[str] = None, generate_schemas: bool = GENERATE_SCHEMAS):
    """Initializes the Tortoise ORM connection and optionally generates schemas."""
    db_url = db_url or DB_URL
    try:
        # Timestamps are stored in UTC; local day boundaries are computed in services.summaries
        await Tortoise.init(
            db_url=db_url,
            modules={"models": MODELS_MODULES},
            use_tz=True,
            timezone="UTC",
        )
        if generate_schemas:
            await Tortoise.generate_schemas()
        log.info("Database connection established.")
    except Exception:
        log.exception("Could not connect to database at %s", db_url)
        # Re-raise to prevent the application from starting without a database
        raise


async def close_db():
    """Closes all database connections."""
    await Tortoise.close_connections()
    log.info("Database connections closed.")
