"""Event record: one performance or appearance."""

from pydantic import Field

from linkhub.models.base import StoredRecord

EVENT_STATUS_UPCOMING = "upcoming"
EVENT_STATUS_CANCELLED = "cancelled"


class Event(StoredRecord):
    """
    A scheduled performance.

    ``date`` is expected as YYYY-MM-DD but stored as given. ``status`` is
    free text; "upcoming" and "cancelled" are the values the site renders
    specially.
    """

    title: str
    date: str
    time: str = ""
    venue: str = ""
    location: str = ""
    ticket_url: str = Field(default="", alias="ticketUrl")
    description: str = ""
    status: str = EVENT_STATUS_UPCOMING
