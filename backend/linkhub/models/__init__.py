"""Record models stored in the flat-file collections."""

from linkhub.models.base import StoredRecord
from linkhub.models.link import Link
from linkhub.models.event import Event

__all__ = [
    "StoredRecord",
    "Link",
    "Event",
]
