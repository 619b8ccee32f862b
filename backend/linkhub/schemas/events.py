from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class EventCreateRequest(BaseModel):
    """
    Request schema for creating an event.

    Only title and date are required, and that is enforced by the store.
    ``ticketUrl`` is accepted in camelCase as sent by the admin panel.
    """
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "title": "Live at The Roundhouse",
                "date": "2026-11-21",
                "time": "20:00",
                "venue": "The Roundhouse",
                "location": "London, UK",
                "ticketUrl": "https://tickets.example.com/roundhouse",
                "description": "Album launch show",
                "status": "upcoming",
            }
        },
    )

    title: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    venue: Optional[str] = None
    location: Optional[str] = None
    ticket_url: Optional[str] = Field(default=None, alias="ticketUrl")
    description: Optional[str] = None
    status: Optional[str] = None
