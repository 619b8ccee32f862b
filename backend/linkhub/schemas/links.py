from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class LinkCreateRequest(BaseModel):
    """
    Request schema for creating a link.

    Fields are optional here so that a missing platform or url is reported
    by the store as a 400, the same as an empty one.
    """
    platform: Optional[str] = Field(default=None, description="Platform label")
    url: Optional[str] = Field(default=None, description="Destination URL")
    icon: Optional[str] = Field(default=None, description="Icon name or URL")

    class Config:
        json_schema_extra = {
            "example": {
                "platform": "Spotify",
                "url": "https://open.spotify.com/artist/123",
                "icon": "spotify",
            }
        }


class ClickResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    click_count: int = Field(..., alias="clickCount")
