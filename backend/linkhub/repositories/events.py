"""
Event repository.

Provides data access for performances and appearances.
"""

from pathlib import Path
from typing import List, Optional

from linkhub.models.event import Event
from linkhub.store.collection import CollectionStore, required_fields
from linkhub.store.gate import AccessGate, CallerContext

EVENTS_FILENAME = "events.json"


class EventRepository:
    """
    Repository for event data access.

    Optional text fields default to "" and status defaults to "upcoming";
    status is stored as given, there is no fixed set of values.
    """

    def __init__(self, data_directory: Path, gate: Optional[AccessGate] = None):
        self.store: CollectionStore[Event] = CollectionStore(
            name="events",
            path=Path(data_directory) / EVENTS_FILENAME,
            model=Event,
            validator=required_fields("title", "date"),
            label="Event",
        )
        self.gate = gate or AccessGate()

    async def list(self) -> List[Event]:
        return await self.store.list()

    async def get(self, event_id: int) -> Optional[Event]:
        return await self.store.get_by_id(event_id)

    async def create(
        self,
        context: CallerContext,
        title: Optional[str],
        date: Optional[str],
        time: Optional[str] = None,
        venue: Optional[str] = None,
        location: Optional[str] = None,
        ticket_url: Optional[str] = None,
        description: Optional[str] = None,
        status: Optional[str] = None,
    ) -> Event:
        """
        Create an event.

        Raises:
            Unauthorized: Caller is not an admin
            ValidationError: title or date missing/empty
        """
        self.gate.require(context, action="create_event")
        return await self.store.insert(
            {
                "title": title,
                "date": date,
                "time": time,
                "venue": venue,
                "location": location,
                "ticketUrl": ticket_url,
                "description": description,
                "status": status,
            }
        )

    async def delete(self, context: CallerContext, event_id: int) -> bool:
        """
        Delete an event by id.

        Raises:
            Unauthorized: Caller is not an admin
            NotFound: No event with that id
        """
        self.gate.require(context, action="delete_event")
        return await self.store.delete_by_id(event_id)
