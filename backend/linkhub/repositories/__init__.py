"""
Repository layer for data access.

Each repository wraps one flat-file collection, adding entity validation,
default filling and the admin gate on mutations.
"""

from linkhub.repositories.links import LinkRepository
from linkhub.repositories.events import EventRepository

__all__ = [
    "LinkRepository",
    "EventRepository",
]
