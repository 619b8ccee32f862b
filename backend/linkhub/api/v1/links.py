"""
Link endpoints.

Listing and click counting are public; creating and deleting links require
an admin token (enforced by the repository's access gate).
"""

from typing import List

from fastapi import APIRouter, status

from linkhub.api.dependencies import Caller, LinkRepo, parse_record_id
from linkhub.models.link import Link
from linkhub.schemas.common import SuccessResponse
from linkhub.schemas.links import ClickResponse, LinkCreateRequest

router = APIRouter()


@router.get("/links", response_model=List[Link], summary="List links")
async def list_links(links: LinkRepo) -> List[Link]:
    return await links.list()


@router.post(
    "/links",
    response_model=Link,
    status_code=status.HTTP_201_CREATED,
    summary="Create link",
)
async def create_link(
    payload: LinkCreateRequest,
    links: LinkRepo,
    caller: Caller,
) -> Link:
    """
    Create a link.

    Raises:
        401: Caller is not an admin
        400: platform or url missing
    """
    return await links.create(
        caller,
        platform=payload.platform,
        url=payload.url,
        icon=payload.icon,
    )


@router.delete("/links/{link_id}", response_model=SuccessResponse, summary="Delete link")
async def delete_link(link_id: str, links: LinkRepo, caller: Caller) -> SuccessResponse:
    """
    Delete a link.

    Raises:
        401: Caller is not an admin
        404: No link with that id
    """
    await links.delete(caller, parse_record_id(link_id))
    return SuccessResponse()


@router.post(
    "/links/{link_id}/click",
    response_model=ClickResponse,
    summary="Record a click",
)
async def record_click(link_id: str, links: LinkRepo) -> ClickResponse:
    """
    Count one click on a link. Public.

    Example response:
        {"success": true, "clickCount": 43}
    """
    link = await links.record_click(parse_record_id(link_id))
    return ClickResponse(click_count=link.click_count)
