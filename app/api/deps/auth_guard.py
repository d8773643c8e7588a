"""
JWT Authentication Guard for FastAPI.
Validates bearer access tokens and provides role-based access control.
"""

from typing import List, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.exceptions import AuthenticationError, AuthorizationError
from app.core.logging import get_logger
from app.core.security import decode_access_token
from app.domain.models.user import Role

logger = get_logger(__name__)

# Security scheme for bearer tokens
security = HTTPBearer(auto_error=False)


class AuthenticatedUser:
    """Authenticated user data structure."""

    def __init__(self, user_id: str, email: str, role: str):
        self.user_id = user_id
        self.email = email
        self.role = role


class JwtAuthGuard:
    """Bearer token guard."""

    def authenticate_token(self, token: Optional[str]) -> AuthenticatedUser:
        """Validate an access token and return the user it was issued to."""
        if not token:
            raise AuthenticationError("Access token is required")

        # InvalidTokenError propagates to the accounts exception handler
        payload = decode_access_token(token)

        return AuthenticatedUser(
            user_id=payload["sub"],
            email=payload.get("email", ""),
            role=payload.get("role", Role.USER.value),
        )

    def check_role_access(
        self, user: AuthenticatedUser, required_roles: Optional[List[str]] = None
    ) -> None:
        """Check if user has required role access."""
        if not required_roles:
            return

        if user.role not in required_roles:
            raise AuthorizationError(
                f"Access denied. Required roles: {', '.join(required_roles)}. Your role: {user.role}"
            )

    def authenticate(
        self,
        request: Request,
        credentials: Optional[HTTPAuthorizationCredentials],
        required_roles: Optional[List[str]] = None,
    ) -> AuthenticatedUser:
        """Main authentication method."""
        token = credentials.credentials if credentials else None
        user = self.authenticate_token(token)
        self.check_role_access(user, required_roles)

        logger.info(f"User {user.user_id} ({user.role}) accessed {request.method} {request.url}")
        return user


# Global guard instance
jwt_auth_guard = JwtAuthGuard()


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> AuthenticatedUser:
    """
    FastAPI dependency to get current authenticated user.

    Raises:
        AuthenticationError: If the token is missing
        InvalidTokenError: If the token is malformed or expired
    """
    return jwt_auth_guard.authenticate(request, credentials)


async def get_admin_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> AuthenticatedUser:
    """Dependency for getting current admin user."""
    return jwt_auth_guard.authenticate(request, credentials, [Role.ADMIN.value])
