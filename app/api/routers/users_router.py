"""
Users Router.
Handles account profile, avatar and role endpoints.
"""

from fastapi import APIRouter, Depends, File, UploadFile

from app.api.deps.auth_guard import AuthenticatedUser, get_admin_user, get_current_user
from app.api.dto.user_dto import (
    CreateUserDTO,
    EmptyResponseDTO,
    UpdateUserDTO,
    UserIdDTO,
    UserResponseDTO,
)
from app.api.services.users_service import users_service
from app.core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.post("", response_model=UserResponseDTO, status_code=201)
async def create_user(
    request: CreateUserDTO,
    current_user: AuthenticatedUser = Depends(get_admin_user),
) -> UserResponseDTO:
    """
    Provision a user account with its preferences. (Admin Only)
    """
    logger.info(f"Creating user {request.email} by admin {current_user.user_id}")
    user = await users_service.create_user(request)
    return UserResponseDTO(message="User created successfully", data=user)


@router.get("/me", response_model=UserResponseDTO)
async def get_me(
    current_user: AuthenticatedUser = Depends(get_current_user),
) -> UserResponseDTO:
    """Get the profile of the authenticated user."""
    return await users_service.get_user_by_id(current_user.user_id)


@router.patch("/me", response_model=EmptyResponseDTO)
async def update_me(
    request: UpdateUserDTO,
    current_user: AuthenticatedUser = Depends(get_current_user),
) -> EmptyResponseDTO:
    """
    Update the profile of the authenticated user.

    Send `null` for a field to clear it; omitted and empty fields are left unchanged.
    """
    return await users_service.update_user(current_user.user_id, request)


@router.post("/me/avatar", response_model=EmptyResponseDTO)
async def upload_avatar(
    file: UploadFile = File(...),
    current_user: AuthenticatedUser = Depends(get_current_user),
) -> EmptyResponseDTO:
    """Replace the profile picture of the authenticated user."""
    content = await file.read()
    return await users_service.upload_avatar(
        current_user.user_id,
        content,
        filename=file.filename or "avatar",
        content_type=file.content_type or "application/octet-stream",
    )


@router.post("/make-admin", response_model=EmptyResponseDTO)
async def make_admin(
    request: UserIdDTO,
    current_user: AuthenticatedUser = Depends(get_admin_user),
) -> EmptyResponseDTO:
    """Give another user the admin role. (Admin Only)"""
    logger.info(f"Admin {current_user.user_id} promoting user {request.user_id}")
    return await users_service.make_admin(request.user_id)


@router.get("/{user_id}", response_model=UserResponseDTO)
async def get_user(
    user_id: str,
    current_user: AuthenticatedUser = Depends(get_current_user),
) -> UserResponseDTO:
    """Get a user profile by ID."""
    return await users_service.get_user_by_id(user_id)
