"""
User Repository for MongoDB operations.
Handles CRUD operations for user accounts in MongoDB.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import DuplicateKeyError, PyMongoError

from app.core.config import get_mongodb_database_name, get_mongodb_url, settings
from app.core.exceptions import DatabaseError, EmailAlreadyRegisteredError
from app.core.logging import get_logger
from app.domain.models.user import UserModel

logger = get_logger(__name__)


def _to_object_id(user_id: str) -> Optional[ObjectId]:
    """Parse a user ID, returning None when it is not a valid ObjectId."""
    try:
        return ObjectId(user_id)
    except (InvalidId, TypeError):
        return None


class UserRepository:
    """Repository for user operations."""

    def __init__(self, collection=None):
        """
        Initialize user repository.

        Args:
            collection: Pre-built collection to use instead of connecting to MongoDB
        """
        self.client: Optional[AsyncIOMotorClient] = None
        self.db = None
        self.collection = collection

    async def connect(self):
        """Connect to MongoDB."""
        if self.collection is None:
            self.client = AsyncIOMotorClient(get_mongodb_url())
            self.db = self.client[get_mongodb_database_name()]
            self.collection = self.db[settings.USERS_COLLECTION]
            logger.info("Connected to MongoDB users collection")

    async def disconnect(self):
        """Disconnect from MongoDB."""
        if self.client:
            self.client.close()
            self.client = None
            self.collection = None
            logger.info("Disconnected from MongoDB")

    async def ensure_indexes(self):
        """Create the unique email index."""
        await self.connect()
        await self.collection.create_index("email", unique=True)

    async def create_user(self, user: UserModel) -> UserModel:
        """
        Create a new user in MongoDB.

        Args:
            user: User data to create

        Returns:
            Created user with its assigned ID

        Raises:
            EmailAlreadyRegisteredError: If the email is already in use
            DatabaseError: If MongoDB rejects the write
        """
        await self.connect()

        user_dict = user.to_document()
        user_dict["createdAt"] = datetime.now(timezone.utc)
        user_dict["updatedAt"] = datetime.now(timezone.utc)

        try:
            result = await self.collection.insert_one(user_dict)
        except DuplicateKeyError as e:
            raise EmailAlreadyRegisteredError(user.email) from e
        except PyMongoError as e:
            logger.error(f"Error creating user: {e}")
            raise DatabaseError("Failed to create user", details={"reason": str(e)}) from e

        created_user = await self.collection.find_one({"_id": result.inserted_id})

        logger.info(f"Created user with ID: {result.inserted_id}")
        return UserModel.from_document(created_user)

    async def get_user_by_id(self, user_id: str) -> Optional[UserModel]:
        """
        Get user by ID.

        Args:
            user_id: User ID (MongoDB ObjectId as string)

        Returns:
            User or None if not found (including malformed IDs)
        """
        await self.connect()

        object_id = _to_object_id(user_id)
        if object_id is None:
            return None

        document = await self.collection.find_one({"_id": object_id})
        return UserModel.from_document(document) if document else None

    async def get_user_by_email(self, email: str) -> Optional[UserModel]:
        """
        Get user by email.

        Args:
            email: User email

        Returns:
            User or None if not found
        """
        await self.connect()

        document = await self.collection.find_one({"email": email})
        return UserModel.from_document(document) if document else None

    async def update_user(
        self,
        user_id: str,
        set_fields: Dict[str, Any],
        unset_fields: Iterable[str] = (),
    ) -> bool:
        """
        Apply a partial update to a user.

        Args:
            user_id: User ID
            set_fields: Stored field paths to overwrite (dotted paths allowed)
            unset_fields: Stored field paths to remove

        Returns:
            True if a user matched the ID

        Raises:
            DatabaseError: If MongoDB rejects the write
        """
        await self.connect()

        object_id = _to_object_id(user_id)
        if object_id is None:
            return False

        update: Dict[str, Any] = {
            "$set": {**set_fields, "updatedAt": datetime.now(timezone.utc)}
        }
        unset_fields = list(unset_fields)
        if unset_fields:
            update["$unset"] = {field: "" for field in unset_fields}

        try:
            result = await self.collection.update_one({"_id": object_id}, update)
        except PyMongoError as e:
            logger.error(f"Error updating user {user_id}: {e}")
            raise DatabaseError("Failed to update user", details={"reason": str(e)}) from e
        return result.matched_count > 0

    async def delete_user(self, user_id: str) -> bool:
        """
        Delete a user.

        Args:
            user_id: User ID

        Returns:
            True if a user was deleted
        """
        await self.connect()

        object_id = _to_object_id(user_id)
        if object_id is None:
            return False

        result = await self.collection.delete_one({"_id": object_id})
        logger.info(f"Deleted user with ID: {user_id}")
        return result.deleted_count > 0


# Global repository instance
user_repository = UserRepository()
