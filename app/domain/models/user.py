"""
MongoDB models for user accounts.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    """Authorization role. New accounts start with the lowest privilege."""

    USER = "user"
    ADMIN = "admin"


class Avatar(BaseModel):
    """Profile picture stored in the image store. Both parts are always set together."""

    model_config = ConfigDict(populate_by_name=True)

    url: str = Field(..., description="Public URL of the image")
    public_id: str = Field(..., alias="publicId", description="Image store asset ID")


class Socials(BaseModel):
    """Social network profile links."""

    github: Optional[str] = Field(None, description="GitHub profile URL")
    twitter: Optional[str] = Field(None, description="Twitter profile URL")
    instagram: Optional[str] = Field(None, description="Instagram profile URL")
    linkedin: Optional[str] = Field(None, description="LinkedIn profile URL")


class UserModel(BaseModel):
    """User account as stored in the users collection."""

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(None, description="User ID (MongoDB ObjectId as string)")
    email: str = Field(..., description="Unique user email")
    password: Optional[str] = Field(
        None, exclude=True, description="Password hash, absent for federated accounts"
    )
    first_name: Optional[str] = Field(None, alias="firstName", description="First name")
    last_name: Optional[str] = Field(None, alias="lastName", description="Last name")
    bio: Optional[str] = Field(None, description="Short biography")
    country: Optional[str] = Field(None, description="Country")
    city: Optional[str] = Field(None, description="City")
    website: Optional[str] = Field(None, description="Personal website URL")
    socials: Socials = Field(default_factory=Socials, description="Social links")
    avatar: Optional[Avatar] = Field(None, description="Profile picture")
    role: Role = Field(Role.USER, description="Authorization role")
    created_at: Optional[datetime] = Field(None, alias="createdAt", description="Created at")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt", description="Updated at")

    def to_document(self) -> Dict[str, Any]:
        """Build the MongoDB document for this user (without `_id`)."""
        document = self.model_dump(by_alias=True, exclude_none=True, exclude={"id"})
        if self.password:
            document["password"] = self.password
        document["role"] = self.role.value
        return document

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "UserModel":
        """Build a user from a MongoDB document, mapping `_id` to `id`."""
        data = dict(document)
        if "_id" in data:
            data["id"] = str(data.pop("_id"))
        return cls.model_validate(data)
