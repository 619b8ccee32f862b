"""
Centralized configuration management using Pydantic Settings.

This module provides type-safe configuration management with validation,
loading settings from environment variables and .env files.
"""

from functools import lru_cache
from typing import Annotated, List, Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
import json


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables.
    Secrets should never be committed to code - use .env file (gitignored).
    """

    # API Configuration
    api_prefix: str = Field(
        default="/api",
        description="Prefix for all JSON API endpoints"
    )
    project_name: str = Field(
        default="Artist Link Hub",
        description="Project name displayed in API docs"
    )
    musician_name: str = Field(
        default="Your Artist Name",
        description="Artist name shown on the public site"
    )

    # Storage
    data_directory: str = Field(
        default="./data",
        description="Directory holding links.json and events.json"
    )

    # Admin authentication
    admin_password: str = Field(
        default="changeme",
        description="Plain admin password (used when no hash is configured)"
    )
    admin_password_hash: Optional[str] = Field(
        default=None,
        description="Bcrypt hash of the admin password (takes precedence)"
    )
    secret_key: str = Field(
        ...,
        description="Secret key for JWT token signing (generate with: openssl rand -hex 32)"
    )
    access_token_expire_minutes: int = Field(
        default=120,
        gt=0,
        description="Admin session lifetime in minutes"
    )

    # Booking mail
    booking_email: str = Field(
        default="bookings@example.com",
        description="Address that receives booking inquiries"
    )
    smtp_host: Optional[str] = Field(default=None, description="SMTP server host")
    smtp_port: int = Field(default=587, description="SMTP server port")
    smtp_user: Optional[str] = Field(default=None, description="SMTP username")
    smtp_pass: Optional[str] = Field(default=None, description="SMTP password")
    smtp_secure: bool = Field(
        default=False,
        description="Use implicit TLS (SMTPS) instead of STARTTLS"
    )
    smtp_from: Optional[str] = Field(
        default=None,
        description="From header override for outgoing mail"
    )

    # CORS Configuration
    cors_origins: Annotated[List[str], NoDecode] = Field(
        default=["http://localhost:3000"],
        description="Allowed CORS origins (frontend URLs)"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Root log level")
    log_json: bool = Field(default=True, description="Emit JSON formatted logs")

    # Rate limiting
    disable_rate_limit: bool = Field(
        default=False,
        description="Turn off the per-IP rate limiter (tests, local dev)"
    )
    auth_rate_limit: int = Field(
        default=10,
        gt=0,
        description="Requests per minute allowed on the admin login endpoint"
    )
    default_rate_limit: int = Field(
        default=120,
        gt=0,
        description="Requests per minute allowed on all other endpoints"
    )

    # Pydantic Settings Configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: str | List[str]) -> List[str]:
        """
        Parse cors_origins from JSON string or list.

        Supports comma-separated origins for easier .env configuration.
        """
        if isinstance(v, str):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                return [s.strip() for s in v.split(",") if s.strip()]
        return v

    @field_validator("secret_key")
    @classmethod
    def validate_secret_key(cls, v: str) -> str:
        """
        Validate that secret_key is properly configured.

        Raises ValueError if still using placeholder value or too short.
        """
        if not v or v.strip() == "":
            raise ValueError(
                "SECRET_KEY is required and cannot be empty. "
                "Generate one with: openssl rand -hex 32"
            )
        if v in ["generate-with-openssl-rand-hex-32", "CHANGE_ME_32_CHARS_MIN", "your-secret-key-here"]:
            raise ValueError(
                "SECRET_KEY must be set to a secure random value (not placeholder). "
                "Generate one with: openssl rand -hex 32"
            )
        if len(v) < 32:
            raise ValueError(
                f"SECRET_KEY must be at least 32 characters long for security. "
                f"Current length: {len(v)}. Generate with: openssl rand -hex 32"
            )
        return v

    @field_validator("admin_password")
    @classmethod
    def validate_admin_password(cls, v: str) -> str:
        if not v:
            raise ValueError("ADMIN_PASSWORD cannot be empty")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"LOG_LEVEL must be a standard logging level, got: {v}")
        return level


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
