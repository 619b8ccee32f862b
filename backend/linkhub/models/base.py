"""
Base model for records held in a flat-file collection.

Records are pydantic models. Python attributes are snake_case; the names
written to disk and sent over the wire are the camelCase aliases.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class StoredRecord(BaseModel):
    """
    A record with a store-assigned integer id.

    Keys the model does not declare are kept and written back unchanged,
    so hand-edited files survive a rewrite.

    Attributes:
        id: Positive integer, unique within its collection, never changed
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: int = Field(..., gt=0, description="Store-assigned record id")

    @model_validator(mode="before")
    @classmethod
    def null_optional_fields_to_default(cls, data: Any) -> Any:
        """Treat a stored null in an optional field as the field's default."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for name, field in cls.model_fields.items():
            if field.is_required():
                continue
            for key in {name, field.alias or name}:
                if key in data and data[key] is None:
                    del data[key]
        return data

    def to_stored(self) -> dict:
        """Return the on-disk representation (aliased field names)."""
        return self.model_dump(by_alias=True)
