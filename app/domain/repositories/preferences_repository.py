"""
Preferences Repository for MongoDB operations.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import PyMongoError

from app.core.config import get_mongodb_database_name, get_mongodb_url, settings
from app.core.exceptions import DatabaseError
from app.core.logging import get_logger
from app.domain.models.preferences import PreferencesModel

logger = get_logger(__name__)


class PreferencesRepository:
    """Repository for preferences operations."""

    def __init__(self, collection=None):
        """Initialize preferences repository."""
        self.client: Optional[AsyncIOMotorClient] = None
        self.db = None
        self.collection = collection

    async def connect(self):
        """Connect to MongoDB."""
        if self.collection is None:
            self.client = AsyncIOMotorClient(get_mongodb_url())
            self.db = self.client[get_mongodb_database_name()]
            self.collection = self.db[settings.PREFERENCES_COLLECTION]
            logger.info("Connected to MongoDB preferences collection")

    async def disconnect(self):
        """Disconnect from MongoDB."""
        if self.client:
            self.client.close()
            self.client = None
            self.collection = None
            logger.info("Disconnected from MongoDB")

    async def ensure_indexes(self):
        """One preferences record per user."""
        await self.connect()
        await self.collection.create_index("userId", unique=True)

    async def create_preferences(self, preferences: PreferencesModel) -> PreferencesModel:
        """
        Create the preferences record of a user.

        Args:
            preferences: Preferences to store

        Returns:
            Created preferences with their assigned ID

        Raises:
            DatabaseError: If MongoDB rejects the write
        """
        await self.connect()

        preferences_dict = preferences.to_document()
        preferences_dict["createdAt"] = datetime.now(timezone.utc)
        preferences_dict["updatedAt"] = datetime.now(timezone.utc)

        try:
            result = await self.collection.insert_one(preferences_dict)
        except PyMongoError as e:
            logger.error(f"Error creating preferences for user {preferences.user_id}: {e}")
            raise DatabaseError(
                "Failed to create preferences", details={"reason": str(e)}
            ) from e
        created = await self.collection.find_one({"_id": result.inserted_id})

        logger.info(f"Created preferences for user {preferences.user_id}")
        return PreferencesModel.from_document(created)

    async def get_preferences(self, user_id: str) -> Optional[PreferencesModel]:
        """
        Get the preferences of a user.

        Args:
            user_id: Owning user ID

        Returns:
            Preferences or None if not found
        """
        await self.connect()

        document = await self.collection.find_one({"userId": user_id})
        return PreferencesModel.from_document(document) if document else None

    async def update_preferences(self, user_id: str, set_fields: Dict[str, Any]) -> bool:
        """
        Overwrite the given preference fields.

        Args:
            user_id: Owning user ID
            set_fields: Stored field names to overwrite

        Returns:
            True if a record matched the user ID

        Raises:
            DatabaseError: If MongoDB rejects the write
        """
        await self.connect()

        try:
            result = await self.collection.update_one(
                {"userId": user_id},
                {"$set": {**set_fields, "updatedAt": datetime.now(timezone.utc)}},
            )
        except PyMongoError as e:
            logger.error(f"Error updating preferences for user {user_id}: {e}")
            raise DatabaseError(
                "Failed to update preferences", details={"reason": str(e)}
            ) from e
        return result.matched_count > 0


# Global repository instance
preferences_repository = PreferencesRepository()
