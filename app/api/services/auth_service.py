"""
Auth Service Layer.
Signup and login flows issuing JWT access tokens.
"""

from typing import Optional

from app.api.dto.auth_dto import (
    LoginDTO,
    SignupWithEmailAndPasswordDTO,
    TokenDataDTO,
    TokenResponseDTO,
)
from app.api.dto.user_dto import SignupWithGoogleDTO
from app.api.services.users_service import UsersService, users_service
from app.core.exceptions import AuthenticationError, EmailAlreadyRegisteredError
from app.core.logging import get_logger, log_operation_failure
from app.core.security import create_access_token, verify_password
from app.domain.models.user import UserModel

logger = get_logger(__name__)


class AuthService:
    """Service class for authentication."""

    def __init__(self, users: Optional[UsersService] = None):
        """Initialize auth service."""
        self.users = users or users_service

    def _issue_token(self, user: UserModel, message: str) -> TokenResponseDTO:
        access_token = create_access_token(
            user.id, {"email": user.email, "role": user.role.value}
        )
        return TokenResponseDTO(
            message=message,
            data=TokenDataDTO(access_token=access_token, user=user),
        )

    async def signup(self, signup_dto: SignupWithEmailAndPasswordDTO) -> TokenResponseDTO:
        """
        Register with email and password.

        Raises:
            EmailAlreadyRegisteredError: If the email is already in use
        """
        if await self.users.get_user_by_email(signup_dto.email):
            error = EmailAlreadyRegisteredError(signup_dto.email)
            log_operation_failure(logger, error.message, {"email": signup_dto.email})
            raise error

        user = await self.users.sign_up_with_email_and_password(signup_dto)
        return self._issue_token(user, "Signed up successfully")

    async def login(self, login_dto: LoginDTO) -> TokenResponseDTO:
        """
        Log in with email and password.

        Raises:
            AuthenticationError: On unknown email, wrong password or a passwordless account
        """
        user = await self.users.get_user_by_email(login_dto.email)
        if not user or not verify_password(login_dto.password, user.password):
            error_message = "Invalid email or password"
            log_operation_failure(logger, error_message, {"email": login_dto.email})
            raise AuthenticationError(error_message)

        logger.info("User logged in", user_id=user.id)
        return self._issue_token(user, "Logged in successfully")

    async def google_login(self, google_dto: SignupWithGoogleDTO) -> TokenResponseDTO:
        """Log in with a verified Google identity, creating the account on first use."""
        user = await self.users.get_user_by_email(google_dto.email)
        if not user:
            user = await self.users.sign_up_with_google(google_dto)
        return self._issue_token(user, "Logged in successfully")


# Global service instance
auth_service = AuthService()
