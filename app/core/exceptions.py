"""
Custom exceptions for the Accounts Backend application.
Provides structured error handling for account lifecycle operations.
"""

from typing import Any, Dict, Optional
from fastapi import status


class AccountsException(Exception):
    """Base exception for Accounts Backend application."""

    def __init__(
        self,
        message: str,
        error_code: str = "ACCOUNTS_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


# Request validation
class BadRequestError(AccountsException):
    """Raised when required input is empty or missing."""

    def __init__(self, message: str = "Bad request", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "BAD_REQUEST", details)


# Authentication & Authorization
class AuthenticationError(AccountsException):
    """Raised when authentication fails."""

    def __init__(self, message: str = "Authentication failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "AUTH_ERROR", details)


class AuthorizationError(AccountsException):
    """Raised when authorization fails."""

    def __init__(self, message: str = "Access denied", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "AUTHZ_ERROR", details)


class InvalidTokenError(AccountsException):
    """Raised when a JWT token is invalid or expired."""

    def __init__(self, details: Optional[Dict[str, Any]] = None):
        super().__init__("Invalid token", "INVALID_TOKEN", details)


# Accounts
class UserNotFoundError(AccountsException):
    """Raised when the referenced user does not exist."""

    def __init__(self, message: str = "User not found", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "USER_NOT_FOUND", details)


class EmailAlreadyRegisteredError(AccountsException):
    """Raised when signing up with an email that is already in use."""

    def __init__(self, email: str, details: Optional[Dict[str, Any]] = None):
        message = f"Email already registered: {email}"
        super().__init__(message, "EMAIL_TAKEN", details)


class PreferencesNotFoundError(AccountsException):
    """Raised when a user has no preferences record."""

    def __init__(self, user_id: str, details: Optional[Dict[str, Any]] = None):
        message = f"Preferences not found for user: {user_id}"
        super().__init__(message, "PREFERENCES_NOT_FOUND", details)


# Image store
class ImageStoreError(AccountsException):
    """Raised when image store operations fail."""

    def __init__(
        self,
        message: str = "Image store operation failed",
        error_code: str = "IMAGE_STORE_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, error_code, details)


class ImageUploadError(ImageStoreError):
    """Raised when an image upload is rejected or fails."""

    def __init__(self, message: str = "Image upload failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "IMAGE_UPLOAD_FAILED", details)


class ImageDeleteError(ImageStoreError):
    """Raised when an image cannot be deleted."""

    def __init__(self, public_id: str, details: Optional[Dict[str, Any]] = None):
        message = f"Image delete failed: {public_id}"
        super().__init__(message, "IMAGE_DELETE_FAILED", details)


# Database Operations
class DatabaseError(AccountsException):
    """Raised when database operations fail."""

    def __init__(self, message: str = "Database operation failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "DATABASE_ERROR", details)


def get_exception_status_code(exc: AccountsException) -> int:
    """
    Get the appropriate HTTP status code for an AccountsException.

    Args:
        exc: AccountsException instance

    Returns:
        int: HTTP status code
    """
    status_mapping = {
        "BAD_REQUEST": status.HTTP_400_BAD_REQUEST,

        # Authentication & Authorization
        "AUTH_ERROR": status.HTTP_401_UNAUTHORIZED,
        "AUTHZ_ERROR": status.HTTP_403_FORBIDDEN,
        "INVALID_TOKEN": status.HTTP_401_UNAUTHORIZED,

        # Accounts
        "USER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
        "EMAIL_TAKEN": status.HTTP_409_CONFLICT,
        "PREFERENCES_NOT_FOUND": status.HTTP_404_NOT_FOUND,

        # Image store
        "IMAGE_STORE_ERROR": status.HTTP_502_BAD_GATEWAY,
        "IMAGE_UPLOAD_FAILED": status.HTTP_502_BAD_GATEWAY,
        "IMAGE_DELETE_FAILED": status.HTTP_502_BAD_GATEWAY,

        # Database Operations
        "DATABASE_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
    }

    return status_mapping.get(exc.error_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
