"""
FastAPI dependency functions.

Provides the per-request caller context for the access gate, plus the
repositories and services stored on ``app.state`` by ``create_app``.
"""

from typing import Annotated, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from linkhub.core.config import Settings
from linkhub.core.security import (
    RevokedTokens,
    TokenData,
    decode_access_token,
    is_admin_token,
)
from linkhub.repositories.events import EventRepository
from linkhub.repositories.links import LinkRepository
from linkhub.services.mailer import BookingMailer
from linkhub.store.gate import CallerContext


# A missing header is not an error here; the access gate decides.
bearer_scheme = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_link_repository(request: Request) -> LinkRepository:
    return request.app.state.links


def get_event_repository(request: Request) -> EventRepository:
    return request.app.state.events


def get_mailer(request: Request) -> BookingMailer:
    return request.app.state.mailer


def get_revoked_tokens(request: Request) -> RevokedTokens:
    return request.app.state.revoked_tokens


AppSettings = Annotated[Settings, Depends(get_app_settings)]


async def get_token_data(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
    settings: AppSettings,
    revoked: Annotated[RevokedTokens, Depends(get_revoked_tokens)],
) -> Optional[TokenData]:
    """
    Decode the bearer token, if any.

    Returns:
        TokenData for a valid, unexpired, not-logged-out token; None otherwise
    """
    if credentials is None:
        return None

    token_data = decode_access_token(credentials.credentials, settings)
    if token_data is None or revoked.is_revoked(token_data):
        return None
    return token_data


async def get_caller_context(
    request: Request,
    token_data: Annotated[Optional[TokenData], Depends(get_token_data)],
) -> CallerContext:
    """
    Build the CallerContext handed to repository operations.

    Never raises: anonymous callers get a non-admin context and the access
    gate refuses their mutations with Unauthorized.
    """
    request_id = getattr(request.state, "request_id", None)
    if is_admin_token(token_data):
        return CallerContext.admin(subject=token_data.subject, request_id=request_id)
    return CallerContext.anonymous(request_id=request_id)


# Type aliases for dependency injection
Caller = Annotated[CallerContext, Depends(get_caller_context)]
CurrentToken = Annotated[Optional[TokenData], Depends(get_token_data)]
LinkRepo = Annotated[LinkRepository, Depends(get_link_repository)]
EventRepo = Annotated[EventRepository, Depends(get_event_repository)]
Mailer = Annotated[BookingMailer, Depends(get_mailer)]
RevokedTokenRegistry = Annotated[RevokedTokens, Depends(get_revoked_tokens)]


def parse_record_id(raw: str) -> int:
    """
    Convert a path segment to a record id.

    A segment that is not an integer maps to 0, which no record carries
    (ids are positive), so the lookup reports NotFound after the access
    gate has run.
    """
    try:
        return int(raw)
    except ValueError:
        return 0
