"""
Auth Router.
Handles signup and login endpoints.
"""

from fastapi import APIRouter

from app.api.dto.auth_dto import LoginDTO, SignupWithEmailAndPasswordDTO, TokenResponseDTO
from app.api.dto.user_dto import SignupWithGoogleDTO
from app.api.services.auth_service import auth_service

router = APIRouter()


@router.post("/signup", response_model=TokenResponseDTO, status_code=201)
async def signup(request: SignupWithEmailAndPasswordDTO) -> TokenResponseDTO:
    """Register with email and password."""
    return await auth_service.signup(request)


@router.post("/login", response_model=TokenResponseDTO)
async def login(request: LoginDTO) -> TokenResponseDTO:
    """Log in with email and password."""
    return await auth_service.login(request)


@router.post("/google", response_model=TokenResponseDTO)
async def google_login(request: SignupWithGoogleDTO) -> TokenResponseDTO:
    """
    Log in with an identity already verified by the Google OAuth flow.
    The account is created on first login.
    """
    return await auth_service.google_login(request)
