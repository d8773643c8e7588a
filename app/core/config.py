"""
Configuration management for the Accounts Backend application.
Handles environment variables and application settings for user accounts and preferences.
"""

from typing import Any, List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Accounts Backend"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # CORS
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]
    ALLOWED_HOSTS: List[str] = ["localhost"]

    # Database - MongoDB
    MONGODB_URL: str = "mongodb://localhost:27017"
    MONGODB_DATABASE: str = "accounts_backend"
    MONGODB_USERNAME: Optional[str] = None
    MONGODB_PASSWORD: Optional[str] = None

    # MongoDB Environment Variables (from .env)
    MONGO_URI: Optional[str] = None
    MONGO_DB_NAME: Optional[str] = None

    USERS_COLLECTION: str = "users"
    PREFERENCES_COLLECTION: str = "preferences"
    MONGO_CREATE_INDEXES: bool = True

    # JWT
    JWT_SECRET_KEY: str = "your-jwt-secret-key-change-in-production"
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # Security
    BCRYPT_ROUNDS: int = 12

    # Cloudinary (avatar storage)
    CLOUDINARY_CLOUD_NAME: Optional[str] = None
    CLOUDINARY_API_KEY: Optional[str] = None
    CLOUDINARY_API_SECRET: Optional[str] = None
    CLOUDINARY_API_BASE_URL: str = "https://api.cloudinary.com/v1_1"
    CLOUDINARY_AVATAR_FOLDER: str = "avatars"
    CLOUDINARY_TIMEOUT: float = 30.0

    # Profile links
    DEFAULT_URL_SCHEME: str = "https"

    # Logging
    LOG_LEVEL: str = "INFO"

    @field_validator("ALLOWED_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",")]
        return v

    @field_validator("ALLOWED_HOSTS", mode="before")
    @classmethod
    def parse_allowed_hosts(cls, v):
        """Parse allowed hosts from string or list."""
        if isinstance(v, str):
            return [host.strip() for host in v.split(",")]
        return v

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v):
        """Validate environment setting."""
        allowed_envs = ["development", "staging", "production", "test"]
        if v not in allowed_envs:
            raise ValueError(f"Environment must be one of {allowed_envs}")
        return v

    def get_cloudinary_upload_url(self) -> str:
        """Endpoint for signed image uploads."""
        return f"{self.CLOUDINARY_API_BASE_URL}/{self.CLOUDINARY_CLOUD_NAME}/image/upload"

    def get_cloudinary_destroy_url(self) -> str:
        """Endpoint for deleting an uploaded image."""
        return f"{self.CLOUDINARY_API_BASE_URL}/{self.CLOUDINARY_CLOUD_NAME}/image/destroy"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True

    def model_post_init(self, __context: Any) -> None:  # type: ignore[override]
        """Normalize the preferred MongoDB env names."""
        if not self.MONGO_URI and self.MONGODB_USERNAME and self.MONGODB_PASSWORD:
            base_url = self.MONGODB_URL.replace("mongodb://", "")
            if "@" not in base_url:
                self.MONGO_URI = (
                    f"mongodb://{self.MONGODB_USERNAME}:{self.MONGODB_PASSWORD}@{base_url}"
                )


# Create global settings instance
settings = Settings()


def get_mongodb_url() -> str:
    """
    Get MongoDB connection URL with authentication if credentials are provided.

    Returns:
        str: MongoDB connection URL
    """
    if settings.MONGO_URI:
        return settings.MONGO_URI
    return settings.MONGODB_URL


def get_mongodb_database_name() -> str:
    """
    Get MongoDB database name.

    Returns:
        str: MongoDB database name
    """
    if settings.MONGO_DB_NAME:
        return settings.MONGO_DB_NAME
    return settings.MONGODB_DATABASE
