"""
Error taxonomy for the record store.

Every failure the store reports is one of these kinds so the HTTP layer can
map it to a status code without inspecting messages.
"""

from typing import Iterable, Optional


class StoreError(Exception):
    """Base class for all record store errors."""


class Unauthorized(StoreError):
    """The caller is not an authenticated admin. Nothing was written."""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class ValidationError(StoreError):
    """
    A required field is missing or empty. Nothing was written.

    Attributes:
        missing_fields: Names of the offending fields, in declaration order
    """

    def __init__(self, missing_fields: Iterable[str], message: Optional[str] = None):
        self.missing_fields = list(missing_fields)
        if message is None:
            message = f"Missing required fields: {', '.join(self.missing_fields)}"
        super().__init__(message)


class NotFound(StoreError):
    """No record with the requested id exists. Nothing was written."""

    def __init__(self, collection: str, record_id: int, message: Optional[str] = None):
        self.collection = collection
        self.record_id = record_id
        super().__init__(message or f"{collection} record {record_id} not found")


class DecodeError(StoreError):
    """The backing file could not be decoded into a list of records."""
