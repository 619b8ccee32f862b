"""Link record: one social or streaming platform entry."""

from pydantic import Field

from linkhub.models.base import StoredRecord


class Link(StoredRecord):
    platform: str = Field(..., description="Platform label, e.g. Spotify")
    url: str = Field(..., description="Destination URL")
    icon: str = Field(default="", description="Icon name or URL")
    click_count: int = Field(default=0, ge=0, alias="clickCount")
