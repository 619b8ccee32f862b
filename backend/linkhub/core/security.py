"""
Security module for admin authentication.

Provides password verification (bcrypt or constant-time comparison) and JWT
session tokens using python-jose. The result of a successful login is a
token whose claims the API turns into a CallerContext for the access gate.
"""

import hmac
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import bcrypt
from jose import JWTError, jwt
from pydantic import BaseModel, Field

from linkhub.core.config import Settings

# JWT Algorithm
ALGORITHM = "HS256"

ADMIN_SUBJECT = "admin"
ADMIN_ROLE = "admin"


class TokenData(BaseModel):
    """
    JWT token payload data model.

    Contains the claims stored in the JWT token.
    """
    subject: str
    role: Optional[str] = None
    token_id: Optional[str] = None
    exp: Optional[datetime] = None


def _password_bytes(password: str) -> bytes:
    # bcrypt only looks at the first 72 bytes
    return password.encode("utf-8")[:72]


def verify_password(plain_password: str, hashed_password: str | bytes) -> bool:
    """
    Verify a plain password against a bcrypt hash.

    Args:
        plain_password: The plain text password to verify
        hashed_password: The hashed password to compare against

    Returns:
        True if password matches, False otherwise (including malformed hashes)
    """
    if isinstance(hashed_password, str):
        hashed_bytes = hashed_password.encode("utf-8")
    else:
        hashed_bytes = hashed_password

    try:
        return bcrypt.checkpw(_password_bytes(plain_password), hashed_bytes)
    except ValueError:
        return False


def get_password_hash(password: str) -> str:
    """
    Hash a password using bcrypt.

    Use this to produce the value for ADMIN_PASSWORD_HASH.
    """
    salt = bcrypt.gensalt(rounds=12)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def authenticate_admin(password: Optional[str], settings: Settings) -> bool:
    """
    Check a submitted admin password.

    ADMIN_PASSWORD_HASH wins when configured; otherwise the password is
    compared to ADMIN_PASSWORD in constant time.
    """
    if not password:
        return False

    if settings.admin_password_hash:
        return verify_password(password, settings.admin_password_hash)

    return hmac.compare_digest(
        password.encode("utf-8"),
        settings.admin_password.encode("utf-8"),
    )


def create_access_token(
    data: Dict[str, Any],
    settings: Settings,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Create a JWT access token.

    Args:
        data: Dictionary of claims to encode in the token
        settings: Settings supplying the signing key and default lifetime
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token string

    Example:
        >>> token = create_access_token({"sub": "admin", "role": "admin"}, settings)
    """
    to_encode = data.copy()

    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    to_encode.update({"exp": datetime.now(timezone.utc) + expires_delta})

    return jwt.encode(to_encode, settings.secret_key, algorithm=ALGORITHM)


def create_admin_token(settings: Settings) -> str:
    return create_access_token(
        {"sub": ADMIN_SUBJECT, "role": ADMIN_ROLE, "jti": uuid.uuid4().hex},
        settings,
    )


def decode_access_token(token: str, settings: Settings) -> Optional[TokenData]:
    """
    Decode and validate a JWT access token.

    Returns:
        TokenData if valid, None if malformed, badly signed or expired
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM])
    except JWTError:
        return None

    subject = payload.get("sub")
    if subject is None:
        return None

    exp = payload.get("exp")
    return TokenData(
        subject=subject,
        role=payload.get("role"),
        token_id=payload.get("jti"),
        exp=datetime.fromtimestamp(exp, tz=timezone.utc) if exp is not None else None,
    )


def is_admin_token(token_data: Optional[TokenData]) -> bool:
    return token_data is not None and token_data.role == ADMIN_ROLE


class Token(BaseModel):
    """
    Login response model.

    Returned by the admin login endpoint after a successful password check.
    """
    success: bool = Field(default=True)
    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type (always 'bearer')")


class LoginRequest(BaseModel):
    """Admin login request: the shared admin password."""
    password: Optional[str] = Field(default=None, description="Admin password")


class RevokedTokens:
    """
    In-process registry of logged-out admin tokens.

    Entries are keyed by the token's ``jti`` and dropped once the token
    would have expired anyway.
    """

    def __init__(self) -> None:
        self._revoked: Dict[str, datetime] = {}

    def revoke(self, token_data: TokenData) -> None:
        if token_data.token_id is None:
            return
        expires = token_data.exp or datetime.now(timezone.utc)
        self._revoked[token_data.token_id] = expires
        self._prune()

    def is_revoked(self, token_data: TokenData) -> bool:
        return token_data.token_id is not None and token_data.token_id in self._revoked

    def _prune(self) -> None:
        now = datetime.now(timezone.utc)
        for token_id in [tid for tid, exp in self._revoked.items() if exp <= now]:
            del self._revoked[token_id]
