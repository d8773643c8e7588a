"""
Preferences Service Layer.
Owns the preferences record that accompanies every user.
"""

from typing import Optional

from app.api.dto.common_dto import HttpResponse, success_response
from app.api.dto.preferences_dto import UpdatePreferencesDTO
from app.core.exceptions import BadRequestError, PreferencesNotFoundError
from app.core.logging import get_logger, log_operation_failure
from app.domain.models.preferences import PreferencesModel
from app.domain.repositories.preferences_repository import (
    PreferencesRepository,
    preferences_repository,
)

logger = get_logger(__name__)


class PreferencesService:
    """Service class for user preferences."""

    def __init__(self, repository: Optional[PreferencesRepository] = None):
        """Initialize preferences service."""
        self.repository = repository or preferences_repository

    async def create_preferences(self, user_id: str) -> PreferencesModel:
        """Create the default preferences of a new user."""
        return await self.repository.create_preferences(PreferencesModel(user_id=user_id))

    async def get_preferences(self, user_id: str) -> HttpResponse[PreferencesModel]:
        """
        Get the preferences of a user.

        Raises:
            PreferencesNotFoundError: If the user has no preferences record
        """
        preferences = await self.repository.get_preferences(user_id)
        if not preferences:
            error = PreferencesNotFoundError(user_id)
            log_operation_failure(logger, error.message, {"user_id": user_id})
            raise error
        return HttpResponse[PreferencesModel](message="", data=preferences)

    async def update_preferences(
        self, user_id: str, update_dto: Optional[UpdatePreferencesDTO]
    ) -> HttpResponse:
        """
        Overwrite the preferences that were sent with a value.

        Raises:
            BadRequestError: If no preference was sent
            PreferencesNotFoundError: If the user has no preferences record
        """
        set_fields = (
            update_dto.model_dump(by_alias=True, exclude_none=True, mode="json")
            if update_dto
            else {}
        )
        if not set_fields:
            error_message = "No changes made"
            log_operation_failure(logger, error_message, {"user_id": user_id})
            raise BadRequestError(error_message)

        if not await self.repository.update_preferences(user_id, set_fields):
            error = PreferencesNotFoundError(user_id)
            log_operation_failure(logger, error.message, {"user_id": user_id})
            raise error

        logger.info("Updated preferences", user_id=user_id, fields=sorted(set_fields))
        return success_response("Preferences updated successfully")


# Global service instance
preferences_service = PreferencesService()
