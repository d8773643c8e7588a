from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.api.dto.common_dto import HttpResponse
from app.domain.models.user import UserModel


def _normalize_email(value: str) -> str:
    return value.strip().lower()


# Request DTOs
class CreateUserDTO(BaseModel):
    """Request DTO for provisioning a user account."""

    model_config = ConfigDict(populate_by_name=True)

    email: str = Field(..., min_length=3, description="User email")
    password: Optional[str] = Field(None, min_length=8, description="Plain text password")
    first_name: Optional[str] = Field(None, alias="firstName", description="First name")
    last_name: Optional[str] = Field(None, alias="lastName", description="Last name")
    bio: Optional[str] = Field(None, description="Short biography")
    country: Optional[str] = Field(None, description="Country")
    city: Optional[str] = Field(None, description="City")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return _normalize_email(v)


class SignupWithGoogleDTO(BaseModel):
    """
    Identity asserted by Google after a successful federated login.

    The provider picture is not accepted: it has no image store public id, and
    a stored avatar is always a complete (url, publicId) pair.
    """

    model_config = ConfigDict(populate_by_name=True)

    email: str = Field(..., min_length=3, description="Verified Google account email")
    first_name: Optional[str] = Field(None, alias="firstName", description="Given name")
    last_name: Optional[str] = Field(None, alias="lastName", description="Family name")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return _normalize_email(v)


class UpdateUserDTO(BaseModel):
    """
    Partial profile update.

    Each field has three states:
      - not sent: the stored value is left unchanged
      - sent as null: the stored value is cleared
      - sent with a value: the stored value is overwritten, unless the value
        is empty, in which case it is ignored
    """

    model_config = ConfigDict(populate_by_name=True)

    first_name: Optional[str] = Field(None, alias="firstName", description="First name")
    last_name: Optional[str] = Field(None, alias="lastName", description="Last name")
    bio: Optional[str] = Field(None, description="Short biography")
    country: Optional[str] = Field(None, description="Country")
    city: Optional[str] = Field(None, description="City")
    website: Optional[str] = Field(None, description="Personal website")
    github: Optional[str] = Field(None, description="GitHub profile")
    twitter: Optional[str] = Field(None, description="Twitter profile")
    instagram: Optional[str] = Field(None, description="Instagram profile")
    linkedin: Optional[str] = Field(None, description="LinkedIn profile")


class UserIdDTO(BaseModel):
    """Request DTO addressing a user by ID."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userId", min_length=1, description="User ID")


# Response DTOs
UserResponseDTO = HttpResponse[UserModel]
EmptyResponseDTO = HttpResponse[Dict[str, Any]]
