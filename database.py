# database.py
"""
Chefini MongoDB Database Connection.

Uses the PyMongo async client with Beanie ODM.
"""

from pymongo import AsyncMongoClient
from beanie import init_beanie
from typing import Optional
import logging

logger = logging.getLogger(__name__)


def document_models() -> list:
    """Every Beanie document registered with the ODM."""
    from chefini.models.mongodb import (
        UserDocument,
        RecipeDocument,
        RecipeLikeDocument,
        ShoppingListDocument,
        BatchPlanDocument,
    )

    return [
        UserDocument,
        RecipeDocument,
        RecipeLikeDocument,
        ShoppingListDocument,
        BatchPlanDocument,
    ]


class Database:
    """MongoDB database connection manager."""

    client: Optional[AsyncMongoClient] = None
    _initialized: bool = False

    @classmethod
    async def connect_db(cls, database_url: str, database_name: str):
        """
        Connect to MongoDB.

        Args:
            database_url: MongoDB connection string
            database_name: Database name to use
        """
        # Skip if already initialized (prevents multiple worker initialization)
        if cls._initialized:
            return

        try:
            cls.client = AsyncMongoClient(
                database_url,
                serverSelectionTimeoutMS=5000,  # 5 second timeout
                maxPoolSize=50,
                uuidRepresentation="standard",
                tz_aware=True,
            )

            db = cls.client[database_name]

            # Test connection with ping
            await cls.client.admin.command('ping')
            logger.info(f"Connected to MongoDB: {database_name}")

            await init_beanie(database=db, document_models=document_models())
            logger.info("Beanie ODM initialized with all models")
            cls._initialized = True

        except Exception as e:
            logger.error(f"Error connecting to MongoDB: {e}")
            # The next request retries with a fresh client
            if cls.client:
                await cls.client.close()
                cls.client = None
            raise

    @classmethod
    async def close_db(cls):
        """Close MongoDB connection."""
        if cls.client:
            await cls.client.close()
            cls.client = None
            cls._initialized = False
            logger.info("MongoDB connection closed")

    @classmethod
    async def ping(cls) -> bool:
        """Test MongoDB connection."""
        if not cls.client:
            return False
        try:
            await cls.client.admin.command('ping')
            return True
        except Exception:
            return False
