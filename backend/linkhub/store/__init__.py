"""
Flat-file record store.

Collections of records are kept as JSON arrays on disk. CollectionStore
serializes every operation on a collection; AccessGate guards mutations.
"""

from linkhub.store.collection import CollectionStore, required_fields
from linkhub.store.errors import (
    DecodeError,
    NotFound,
    StoreError,
    Unauthorized,
    ValidationError,
)
from linkhub.store.gate import AccessGate, CallerContext

__all__ = [
    "AccessGate",
    "CallerContext",
    "CollectionStore",
    "DecodeError",
    "NotFound",
    "StoreError",
    "Unauthorized",
    "ValidationError",
    "required_fields",
]
