"""
Contact / booking endpoint.

Forwards a visitor's booking inquiry to the artist by email.
"""

from fastapi import APIRouter, HTTPException, status

from linkhub.api.dependencies import Mailer
from linkhub.schemas.common import SuccessResponse
from linkhub.schemas.contact import ContactRequest
from linkhub.services.mailer import MailError

router = APIRouter()


@router.post("/contact", response_model=SuccessResponse)
async def send_contact(payload: ContactRequest, mailer: Mailer) -> SuccessResponse:
    """
    Send a booking inquiry.

    Raises:
        HTTPException 400: name, email or message missing, or a line break
            in name or email
        HTTPException 500: SMTP not configured, or sending failed
    """
    if not (payload.name and payload.email and payload.message):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Name, email and message are required",
        )

    # Both end up in mail headers
    if any(ch in value for value in (payload.name, payload.email) for ch in "\r\n"):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Name and email must be a single line",
        )

    try:
        await mailer.send_inquiry(payload.name, payload.email, payload.message)
    except MailError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc),
        ) from exc

    return SuccessResponse()
