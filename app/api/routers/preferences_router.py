"""
Preferences Router.
"""

from fastapi import APIRouter, Depends

from app.api.deps.auth_guard import AuthenticatedUser, get_current_user
from app.api.dto.preferences_dto import PreferencesResponseDTO, UpdatePreferencesDTO
from app.api.dto.user_dto import EmptyResponseDTO
from app.api.services.preferences_service import preferences_service

router = APIRouter()


@router.get("/me", response_model=PreferencesResponseDTO)
async def get_my_preferences(
    current_user: AuthenticatedUser = Depends(get_current_user),
) -> PreferencesResponseDTO:
    """Get the preferences of the authenticated user."""
    return await preferences_service.get_preferences(current_user.user_id)


@router.patch("/me", response_model=EmptyResponseDTO)
async def update_my_preferences(
    request: UpdatePreferencesDTO,
    current_user: AuthenticatedUser = Depends(get_current_user),
) -> EmptyResponseDTO:
    """Update the preferences of the authenticated user."""
    return await preferences_service.update_preferences(current_user.user_id, request)
