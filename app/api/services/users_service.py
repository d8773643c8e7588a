"""
Users Service Layer.
Contains business logic for the user account lifecycle.
"""

from typing import Any, Dict, List, Optional, Tuple

from app.api.dto.common_dto import HttpResponse, success_response
from app.api.dto.user_dto import CreateUserDTO, SignupWithGoogleDTO, UpdateUserDTO
from app.api.dto.auth_dto import SignupWithEmailAndPasswordDTO
from app.api.services.preferences_service import PreferencesService, preferences_service
from app.core.exceptions import BadRequestError, ImageStoreError, UserNotFoundError
from app.core.logging import get_logger, log_account_operation, log_operation_failure
from app.core.security import hash_password
from app.domain.models.user import Role, UserModel
from app.domain.repositories.user_repository import UserRepository, user_repository
from app.infrastructure.cloudinary import CloudinaryService, cloudinary_service
from app.utils.url_utils import ensure_url_scheme

logger = get_logger(__name__)

# Updatable profile fields and the document path each one is stored under
PROFILE_FIELD_PATHS: Dict[str, str] = {
    "first_name": "firstName",
    "last_name": "lastName",
    "bio": "bio",
    "country": "country",
    "city": "city",
    "website": "website",
    "github": "socials.github",
    "twitter": "socials.twitter",
    "instagram": "socials.instagram",
    "linkedin": "socials.linkedin",
}

# Fields holding links that get a scheme prefixed when missing
LINK_FIELDS = frozenset({"website", "github", "twitter", "instagram", "linkedin"})


def build_profile_update(patch: UpdateUserDTO) -> Tuple[Dict[str, Any], List[str]]:
    """
    Resolve a profile patch into the fields to set and the fields to clear.

    Fields that were not sent, or were sent with an empty value, are left out.

    Args:
        patch: Partial profile update

    Returns:
        Tuple of (document paths to set with their values, document paths to unset)
    """
    set_fields: Dict[str, Any] = {}
    unset_fields: List[str] = []

    for name, path in PROFILE_FIELD_PATHS.items():
        if name not in patch.model_fields_set:
            continue
        value = getattr(patch, name)
        if value is None:
            unset_fields.append(path)
        elif value:
            set_fields[path] = ensure_url_scheme(value) if name in LINK_FIELDS else value

    return set_fields, unset_fields


class UsersService:
    """Service class for user accounts."""

    def __init__(
        self,
        repository: Optional[UserRepository] = None,
        preferences: Optional[PreferencesService] = None,
        image_store: Optional[CloudinaryService] = None,
    ):
        """Initialize users service."""
        self.repository = repository or user_repository
        self.preferences = preferences or preferences_service
        self.image_store = image_store or cloudinary_service

    async def _get_existing_user(self, user_id: str) -> UserModel:
        """Load a user or fail with UserNotFoundError."""
        user = await self.repository.get_user_by_id(user_id)
        if not user:
            error_message = "User not found"
            log_operation_failure(logger, error_message, {"user_id": user_id})
            raise UserNotFoundError(error_message)
        return user

    async def create_user(self, create_user_dto: CreateUserDTO) -> UserModel:
        """
        Create a user together with its preferences record.

        If the preferences cannot be created the user is removed again and the
        original error is re-raised.

        Args:
            create_user_dto: User data

        Returns:
            Created user
        """
        logger.info("Creating a new user")
        user = UserModel(
            email=create_user_dto.email,
            password=(
                hash_password(create_user_dto.password)
                if create_user_dto.password
                else None
            ),
            first_name=create_user_dto.first_name,
            last_name=create_user_dto.last_name,
            bio=create_user_dto.bio,
            country=create_user_dto.country,
            city=create_user_dto.city,
        )
        created_user = await self.repository.create_user(user)
        log_account_operation("create", user_id=created_user.id, email=created_user.email)

        logger.info("Creating user preferences", user_id=created_user.id)
        try:
            await self.preferences.create_preferences(created_user.id)
        except Exception as e:
            log_operation_failure(
                logger,
                "Failed to create user preferences",
                {"user_id": created_user.id, "error": str(e)},
            )
            await self._remove_user(created_user.id)
            raise

        return created_user

    async def _remove_user(self, user_id: str) -> None:
        """Compensation step for a user whose preferences could not be created."""
        try:
            await self.repository.delete_user(user_id)
            logger.info("Rolled back user creation", user_id=user_id)
        except Exception as e:
            logger.error(
                "Failed to roll back user creation, user left without preferences",
                user_id=user_id,
                error=str(e),
            )

    async def sign_up_with_google(self, signup_dto: SignupWithGoogleDTO) -> UserModel:
        """
        Create a passwordless user from a Google identity.

        No preferences record is created on this path.
        """
        logger.info("Creating a new user")
        user = await self.repository.create_user(
            UserModel(
                email=signup_dto.email,
                first_name=signup_dto.first_name,
                last_name=signup_dto.last_name,
            )
        )
        log_account_operation("signup_google", user_id=user.id, email=user.email)
        return user

    async def sign_up_with_email_and_password(
        self, signup_dto: SignupWithEmailAndPasswordDTO
    ) -> UserModel:
        """Create a user with an email and a hashed password."""
        user = await self.repository.create_user(
            UserModel(email=signup_dto.email, password=hash_password(signup_dto.password))
        )
        log_account_operation("signup_password", user_id=user.id, email=user.email)
        return user

    async def get_user_by_email(self, email: str) -> Optional[UserModel]:
        """Find a user by email. Used by the authentication flows."""
        return await self.repository.get_user_by_email(email)

    async def get_user_by_id(self, user_id: str) -> HttpResponse[UserModel]:
        """
        Get a user by ID.

        Raises:
            UserNotFoundError: If no user matches
        """
        user = await self._get_existing_user(user_id)
        return HttpResponse[UserModel](message="", data=user)

    async def update_user(
        self, user_id: str, update_user_dto: Optional[UpdateUserDTO]
    ) -> HttpResponse:
        """
        Apply a partial profile update.

        Args:
            user_id: User ID
            update_user_dto: Fields to change, see UpdateUserDTO for the field states

        Raises:
            BadRequestError: If nothing was sent
            UserNotFoundError: If no user matches
        """
        if update_user_dto is None or not update_user_dto.model_fields_set:
            error_message = "No changes made"
            log_operation_failure(logger, error_message, {"user_id": user_id})
            raise BadRequestError(error_message)

        await self._get_existing_user(user_id)

        set_fields, unset_fields = build_profile_update(update_user_dto)
        if set_fields or unset_fields:
            await self.repository.update_user(user_id, set_fields, unset_fields)
            log_account_operation(
                "update",
                user_id=user_id,
                fields=sorted(set_fields),
                cleared=sorted(unset_fields),
            )

        return success_response("Account updated successfully")

    async def upload_avatar(
        self,
        user_id: str,
        file: Optional[bytes],
        filename: str = "avatar",
        content_type: str = "application/octet-stream",
    ) -> HttpResponse:
        """
        Replace the profile picture of a user.

        The previous image is deleted from the image store before the new one
        is uploaded. A failed delete is logged and does not stop the upload.

        Raises:
            BadRequestError: If the file is empty or the upload fails
            UserNotFoundError: If no user matches
        """
        if not file:
            error_message = "file is empty"
            log_operation_failure(logger, error_message, {"user_id": user_id})
            raise BadRequestError(error_message)

        user = await self._get_existing_user(user_id)

        if user.avatar and user.avatar.public_id:
            try:
                await self.image_store.delete_image(user.avatar.public_id)
            except ImageStoreError as e:
                logger.warning(
                    "Failed to delete previous avatar",
                    user_id=user_id,
                    public_id=user.avatar.public_id,
                    error=e.message,
                )

        try:
            uploaded = await self.image_store.upload_image(file, filename, content_type)
        except ImageStoreError as e:
            error_message = "file is empty"
            log_operation_failure(
                logger, error_message, {"user_id": user_id, "error": e.message}
            )
            raise BadRequestError(error_message, details=e.details) from e

        await self.repository.update_user(
            user_id,
            {"avatar": {"url": uploaded.secure_url, "publicId": uploaded.public_id}},
        )
        log_account_operation("upload_avatar", user_id=user_id, public_id=uploaded.public_id)

        return success_response("Updated successfully")

    async def make_admin(self, user_id: str) -> HttpResponse:
        """
        Give a user the admin role. Applying it again changes nothing.

        Raises:
            UserNotFoundError: If no user matches
        """
        await self._get_existing_user(user_id)

        await self.repository.update_user(user_id, {"role": Role.ADMIN.value})
        log_account_operation("make_admin", user_id=user_id)

        return success_response("User role updated successfully")


# Global service instance
users_service = UsersService()
