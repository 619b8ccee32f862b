"""
Health check response schemas.
"""

from datetime import datetime
from typing import Dict

from pydantic import BaseModel, Field


class CollectionHealth(BaseModel):
    """State of one backing collection file."""
    readable: bool = Field(..., description="File is absent or decodes cleanly")
    records: int = Field(..., description="Number of records currently stored")


class HealthResponse(BaseModel):
    """
    Liveness response.

    Example:
        {
            "status": "ok",
            "timestamp": "2026-10-19T10:30:00.123456+00:00",
            "collections": {"links": {"readable": true, "records": 4}}
        }
    """
    status: str = Field(..., description="ok or degraded")
    timestamp: datetime
    collections: Dict[str, CollectionHealth] = Field(default_factory=dict)
