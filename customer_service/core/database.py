from tortoise import Tortoise, connections
from tortoise.backends.base.client import BaseDBAsyncClient
from loguru import logger

from customer_service.core.config import settings

# (email, phone) is unique among live rows only, so a soft-deleted
# customer does not block re-registration.
LIVE_CUSTOMER_UNIQUE_INDEX = """
    CREATE UNIQUE INDEX IF NOT EXISTS uq_customers_email_phone_live
    ON customers (email, phone)
    WHERE deleted_at IS NULL;
"""


async def create_constraints(conn: BaseDBAsyncClient) -> None:
    await conn.execute_script(LIVE_CUSTOMER_UNIQUE_INDEX)


class DatabaseManager:
    @staticmethod
    async def init(config: dict | None = None):
        """Initialize the connection pool, schema and partial unique index"""
        await Tortoise.init(config=config or settings.tortoise_config())
        await Tortoise.generate_schemas(safe=True)
        logger.info("Database schema initialized")

        await create_constraints(connections.get("default"))
        logger.info("Unique index uq_customers_email_phone_live created or already exists")

    @staticmethod
    async def close():
        """Close database connections"""
        await Tortoise.close_connections()
        logger.info("Database connections closed")
