"""
Access gate for mutating repository operations.

The gate only answers "is this caller an authenticated admin". How that
fact is established (password check, token) belongs to linkhub.core.security;
the gate sees the result as a CallerContext.
"""

from typing import Optional

from pydantic import BaseModel

from linkhub.core.logging_config import get_logger
from linkhub.store.errors import Unauthorized

logger = get_logger(__name__)


class CallerContext(BaseModel):
    """
    Authentication facts about the caller of one request.

    Attributes:
        is_admin: True once the caller holds a verified admin session
        subject: Token subject, when a valid token was presented
        request_id: Correlation id for logs
    """

    is_admin: bool = False
    subject: Optional[str] = None
    request_id: Optional[str] = None

    @classmethod
    def anonymous(cls, request_id: Optional[str] = None) -> "CallerContext":
        return cls(is_admin=False, request_id=request_id)

    @classmethod
    def admin(cls, subject: str = "admin", request_id: Optional[str] = None) -> "CallerContext":
        return cls(is_admin=True, subject=subject, request_id=request_id)


class AccessGate:
    """Admin capability check consulted before any store mutation."""

    def is_authorized(self, context: Optional[CallerContext]) -> bool:
        return context is not None and context.is_admin

    def require(self, context: Optional[CallerContext], action: str = "mutate") -> None:
        """
        Raise Unauthorized unless the caller is an admin.

        Args:
            context: Caller context for the current request
            action: Operation name, logged on refusal

        Raises:
            Unauthorized: Caller is not an authenticated admin
        """
        if self.is_authorized(context):
            return

        logger.warning(
            "Unauthorized mutation refused",
            extra={
                "action": action,
                "request_id": context.request_id if context else None,
            },
        )
        raise Unauthorized()
