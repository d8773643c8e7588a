from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.api.dto.common_dto import HttpResponse
from app.domain.models.preferences import PreferencesModel, Theme


class UpdatePreferencesDTO(BaseModel):
    """Partial preferences update. Only sent, non-null fields are applied."""

    model_config = ConfigDict(populate_by_name=True)

    theme: Optional[Theme] = Field(None, description="UI theme")
    language: Optional[str] = Field(None, min_length=2, description="Preferred language")
    email_notifications: Optional[bool] = Field(
        None, alias="emailNotifications", description="Receive notification emails"
    )
    newsletter: Optional[bool] = Field(None, description="Subscribed to the newsletter")


PreferencesResponseDTO = HttpResponse[PreferencesModel]
