import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from app.core.config import settings

logger = logging.getLogger(__name__)


class MongoDatabase:
    """MongoDB connection manager."""

    client: AsyncIOMotorClient = None
    db: AsyncIOMotorDatabase = None

mongodb = MongoDatabase()

async def connect_to_mongo():
    """Connect to MongoDB."""
    mongodb.client = AsyncIOMotorClient(settings.MONGODB_URL, tz_aware=True)
    mongodb.db = mongodb.client[settings.DATABASE_NAME]

    await create_indexes()
    logger.info("Connected to MongoDB: %s", settings.DATABASE_NAME)

async def close_mongo_connection():
    """Disconnect from MongoDB."""
    if mongodb.client is not None:
        mongodb.client.close()
        mongodb.client = None
        mongodb.db = None
    logger.info("Disconnected from MongoDB")

async def create_indexes():
    """Create database indexes."""
    # Payable indexes
    await mongodb.db["payables"].create_index([("status", 1), ("due_date", 1)])
    await mongodb.db["payables"].create_index("vendor")

    # Receivable indexes
    await mongodb.db["receivables"].create_index([("status", 1), ("due_date", 1)])
    await mongodb.db["receivables"].create_index("customer")

async def ping() -> bool:
    """Check that the server answers."""
    if mongodb.client is None:
        return False
    await mongodb.client.admin.command("ping")
    return True
