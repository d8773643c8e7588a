from pydantic import BaseModel, Field, field_validator

from app.api.dto.common_dto import HttpResponse
from app.domain.models.user import UserModel


# Request DTOs
class SignupWithEmailAndPasswordDTO(BaseModel):
    """Request DTO for email and password signup."""

    email: str = Field(..., min_length=3, description="User email")
    password: str = Field(..., min_length=8, description="Plain text password")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class LoginDTO(BaseModel):
    """Request DTO for email and password login."""

    email: str = Field(..., description="User email")
    password: str = Field(..., description="Plain text password")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


# Response DTOs
class TokenDataDTO(BaseModel):
    """Issued access token and the authenticated user."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field("bearer", description="Token type")
    user: UserModel = Field(..., description="Authenticated user")


TokenResponseDTO = HttpResponse[TokenDataDTO]
