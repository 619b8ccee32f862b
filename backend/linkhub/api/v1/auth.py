"""
Admin authentication endpoints.

The admin panel logs in with the shared admin password and receives a JWT
that it sends as ``Authorization: Bearer <token>`` on create/delete calls.
"""

from fastapi import APIRouter, HTTPException, status

from linkhub.api.dependencies import AppSettings, CurrentToken, RevokedTokenRegistry
from linkhub.core.logging_config import get_logger
from linkhub.core.security import (
    LoginRequest,
    Token,
    authenticate_admin,
    create_admin_token,
    is_admin_token,
)
from linkhub.schemas.common import SuccessResponse

logger = get_logger(__name__)

router = APIRouter()


@router.post("/login", response_model=Token, status_code=status.HTTP_200_OK)
async def login(payload: LoginRequest, settings: AppSettings) -> Token:
    """
    Exchange the admin password for an access token.

    Example:
        POST /api/admin/login
        {"password": "..."}

        Response:
        {"success": true, "access_token": "eyJ...", "token_type": "bearer"}

    Raises:
        HTTPException 401: Password missing or wrong
    """
    if not authenticate_admin(payload.password, settings):
        logger.warning("Admin login failed")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    logger.info("Admin logged in")
    return Token(access_token=create_admin_token(settings))


@router.post("/logout", response_model=SuccessResponse)
async def logout(token: CurrentToken, revoked: RevokedTokenRegistry) -> SuccessResponse:
    """
    End the admin session. The presented token stops being accepted.

    Always succeeds, with or without a valid token.
    """
    if token is not None:
        revoked.revoke(token)
        logger.info("Admin logged out")
    return SuccessResponse()


@router.get("/me")
async def read_session(token: CurrentToken) -> dict:
    """Report whether the caller currently holds an admin session."""
    return {"authenticated": is_admin_token(token)}
