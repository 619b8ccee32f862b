"""
Event endpoints.

Listing is public; creating and deleting events require an admin token.
"""

from typing import List

from fastapi import APIRouter, status

from linkhub.api.dependencies import Caller, EventRepo, parse_record_id
from linkhub.models.event import Event
from linkhub.schemas.common import SuccessResponse
from linkhub.schemas.events import EventCreateRequest

router = APIRouter()


@router.get("/events", response_model=List[Event], summary="List events")
async def list_events(events: EventRepo) -> List[Event]:
    return await events.list()


@router.post(
    "/events",
    response_model=Event,
    status_code=status.HTTP_201_CREATED,
    summary="Create event",
)
async def create_event(
    payload: EventCreateRequest,
    events: EventRepo,
    caller: Caller,
) -> Event:
    """
    Create an event. Optional fields default to "", status to "upcoming".

    Raises:
        401: Caller is not an admin
        400: title or date missing
    """
    return await events.create(
        caller,
        title=payload.title,
        date=payload.date,
        time=payload.time,
        venue=payload.venue,
        location=payload.location,
        ticket_url=payload.ticket_url,
        description=payload.description,
        status=payload.status,
    )


@router.delete("/events/{event_id}", response_model=SuccessResponse, summary="Delete event")
async def delete_event(event_id: str, events: EventRepo, caller: Caller) -> SuccessResponse:
    await events.delete(caller, parse_record_id(event_id))
    return SuccessResponse()
