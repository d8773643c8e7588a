"""
MongoDB models for user preferences.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class Theme(str, Enum):
    """UI theme."""

    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"


class PreferencesModel(BaseModel):
    """Companion record of a user, one per user, linked by user ID."""

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    id: Optional[str] = Field(None, description="Preferences ID (MongoDB ObjectId as string)")
    user_id: str = Field(..., alias="userId", description="Owning user ID")
    theme: Theme = Field(Theme.SYSTEM, description="UI theme")
    language: str = Field("en", description="Preferred language")
    email_notifications: bool = Field(
        True, alias="emailNotifications", description="Receive notification emails"
    )
    newsletter: bool = Field(False, description="Subscribed to the newsletter")
    created_at: Optional[datetime] = Field(None, alias="createdAt", description="Created at")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt", description="Updated at")

    def to_document(self) -> Dict[str, Any]:
        """Build the MongoDB document (without `_id`)."""
        return self.model_dump(by_alias=True, exclude_none=True, exclude={"id"})

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "PreferencesModel":
        """Build preferences from a MongoDB document, mapping `_id` to `id`."""
        data = dict(document)
        if "_id" in data:
            data["id"] = str(data.pop("_id"))
        return cls.model_validate(data)
