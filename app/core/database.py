"""
MongoDB database connection and utilities.
"""

import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from app.core.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()


class Database:
    """MongoDB database connection manager."""
    
    client: AsyncIOMotorClient = None
    db: AsyncIOMotorDatabase = None
    
    @classmethod
    async def connect(cls):
        """Connect to MongoDB."""
        # tz_aware so stored datetimes compare against timezone-aware "now"
        cls.client = AsyncIOMotorClient(settings.MONGO_URI, tz_aware=True)
        cls.db = cls.client[settings.MONGO_DB_NAME]
        
        # Create indexes
        await cls._create_indexes()
        
        logger.info(f"Connected to MongoDB: {settings.MONGO_DB_NAME}")
    
    @classmethod
    async def disconnect(cls):
        """Disconnect from MongoDB."""
        if cls.client:
            cls.client.close()
            cls.client = None
            cls.db = None
            logger.info("Disconnected from MongoDB")
    
    @classmethod
    async def _create_indexes(cls):
        """Create database indexes for better query performance."""
        # Reminders: due-list scan and recent-watering lookup
        await cls.db.reminders.create_index(
            [("user_id", 1), ("is_completed", 1), ("scheduled_date", 1)]
        )
        await cls.db.reminders.create_index(
            [("user_id", 1), ("reminder_type", 1), ("created_at", -1)]
        )
        
        # Planting history collection
        await cls.db.planting_history.create_index([("user_id", 1), ("is_completed", 1)])
    
    @classmethod
    def get_collection(cls, name: str):
        """Get a collection by name."""
        return cls.db[name]
