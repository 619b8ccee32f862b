"""
Health check endpoint.

Reports liveness plus whether each backing collection file is readable.
An unreadable file does not fail the probe (the store keeps serving it as
empty) but flips the status to "degraded" so operators notice.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, status

from linkhub.api.dependencies import EventRepo, LinkRepo
from linkhub.schemas.health import CollectionHealth, HealthResponse

router = APIRouter()


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Liveness probe",
)
async def health_check(links: LinkRepo, events: EventRepo) -> HealthResponse:
    collections = {}
    for store in (links.store, events.store):
        readable, count = await store.probe()
        collections[store.name] = CollectionHealth(readable=readable, records=count)

    healthy = all(c.readable for c in collections.values())
    return HealthResponse(
        status="ok" if healthy else "degraded",
        timestamp=datetime.now(timezone.utc),
        collections=collections,
    )
