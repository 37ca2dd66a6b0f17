"""
Application lifecycle event handlers.

These functions are executed during application startup and shutdown.
"""

from loguru import logger

from app.core.config import Settings
from app.core.exceptions import LivenessError, StartupError
from app.db.session import Database


async def connect_to_db(config: Settings) -> Database:
    """
    Open the database and prepare it for serving.

    Only a failed connection aborts startup; schema sync and the test
    query are reported and startup continues.

    Raises:
        StartupError: if the database cannot be reached
    """
    database = Database(config.DATABASE_URL or "", echo=config.DB_ECHO)
    logger.info(f"Connecting to database at {database.safe_url}...")

    try:
        await database.connect()
    except StartupError as e:
        logger.critical(e.message)
        await database.dispose()
        raise

    logger.info("Database connected successfully")

    if config.DB_AUTO_MIGRATE:
        try:
            await database.create_schema()
            logger.info("Database schema sync completed")
        except Exception as e:
            logger.warning(f"Database schema sync failed: {e}")

    try:
        result = await database.check_liveness()
        logger.info(f"Database test query successful: {result}")
    except LivenessError as e:
        logger.error(e.message)

    return database


async def close_db_connection(database: Database) -> None:
    """
    Close database connections.
    """
    try:
        logger.info("Closing database connections...")
        await database.dispose()
    except Exception as e:
        logger.error(f"Error closing database connections: {e}")
