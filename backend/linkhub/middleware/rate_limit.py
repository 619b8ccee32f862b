"""
Rate limiting middleware using token bucket algorithm.

Per-IP limits protect the admin login endpoint against password guessing
and keep the public endpoints (notably the click counter, which rewrites
links.json on every call) from being hammered.

Token Bucket Algorithm:
- Each (IP, scope) pair gets a bucket with a fixed capacity
- Tokens are added at a constant rate (refill_rate)
- Each request consumes one token
- If no tokens are available, the request is rejected with 429

Note: buckets live in process memory; they are not shared across workers.
"""

import time
from typing import Callable, Dict, Tuple

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from linkhub.core.logging_config import get_logger

logger = get_logger(__name__)

AUTH_SCOPE = "auth"
DEFAULT_SCOPE = "default"

# Buckets idle for longer than this are dropped during cleanup.
BUCKET_IDLE_TIMEOUT = 600


class TokenBucket:
    """
    Token bucket for rate limiting.

    Attributes:
        capacity: Maximum number of tokens in the bucket
        refill_rate: Number of tokens added per second
        tokens: Current number of available tokens
        last_refill: Monotonic timestamp of last refill operation
    """

    def __init__(self, capacity: int, refill_rate: float):
        if capacity <= 0:
            raise ValueError("Capacity must be positive")
        if refill_rate <= 0:
            raise ValueError("Refill rate must be positive")

        self.capacity = capacity
        self.refill_rate = refill_rate
        self.tokens = float(capacity)
        self.last_refill = time.monotonic()

    def consume(self, tokens: int = 1) -> bool:
        """
        Attempt to consume tokens from the bucket.

        Refills tokens based on elapsed time before checking availability.

        Returns:
            True if tokens were available and consumed, False otherwise
        """
        now = time.monotonic()
        elapsed = now - self.last_refill
        self.tokens = min(self.capacity, self.tokens + elapsed * self.refill_rate)
        self.last_refill = now

        if self.tokens >= tokens:
            self.tokens -= tokens
            return True
        return False

    def get_wait_time(self) -> float:
        """Seconds until the next token is available."""
        if self.tokens >= 1:
            return 0.0
        return (1 - self.tokens) / self.refill_rate


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Rate limiting middleware using a token bucket per client IP and scope.

    Rate limits:
    - Admin login (``*/admin/login``): auth_limit requests/minute
    - Everything else: default_limit requests/minute

    Returns 429 Too Many Requests with Retry-After when a bucket is empty.

    Example:
        app.add_middleware(
            RateLimitMiddleware,
            auth_limit=10,
            default_limit=120,
        )
    """

    def __init__(
        self,
        app,
        auth_limit: int = 10,
        default_limit: int = 120,
        enabled: bool = True,
        cleanup_interval: int = 300,
    ):
        """
        Args:
            app: ASGI application
            auth_limit: Requests per minute for the login endpoint
            default_limit: Requests per minute for other endpoints
            enabled: When False every request passes through untouched
            cleanup_interval: Seconds between sweeps of idle buckets
        """
        super().__init__(app)
        self.auth_limit = auth_limit
        self.default_limit = default_limit
        self.enabled = enabled
        self.cleanup_interval = cleanup_interval

        # {(ip, scope): (bucket, last_access_time)}
        self.buckets: Dict[Tuple[str, str], Tuple[TokenBucket, float]] = {}
        self.last_cleanup = time.monotonic()

        logger.info(
            "Rate limiting initialized",
            extra={
                "enabled": enabled,
                "auth_limit": auth_limit,
                "default_limit": default_limit,
            },
        )

    def _get_client_ip(self, request: Request) -> str:
        forwarded = request.headers.get("X-Forwarded-For")
        if forwarded:
            # First IP in the chain is the original client
            return forwarded.split(",")[0].strip()

        if request.client:
            return request.client.host
        return "unknown"

    def _get_scope_and_limit(self, path: str) -> Tuple[str, int]:
        if path.rstrip("/").endswith("/admin/login"):
            return AUTH_SCOPE, self.auth_limit
        return DEFAULT_SCOPE, self.default_limit

    def _get_or_create_bucket(self, key: Tuple[str, str], limit: int) -> TokenBucket:
        now = time.monotonic()

        if now - self.last_cleanup > self.cleanup_interval:
            self._cleanup_old_buckets(now)

        if key in self.buckets:
            bucket, _ = self.buckets[key]
            self.buckets[key] = (bucket, now)
            return bucket

        # Capacity = limit (burst), refill_rate = limit/60 (per second)
        bucket = TokenBucket(capacity=limit, refill_rate=limit / 60.0)
        self.buckets[key] = (bucket, now)
        return bucket

    def _cleanup_old_buckets(self, now: float) -> None:
        old_keys = [
            key for key, (_, last_access) in self.buckets.items()
            if now - last_access > BUCKET_IDLE_TIMEOUT
        ]
        for key in old_keys:
            del self.buckets[key]

        if old_keys:
            logger.info(
                "Cleaned up old rate limit buckets",
                extra={"count": len(old_keys)},
            )
        self.last_cleanup = now

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        if not self.enabled:
            return await call_next(request)

        client_ip = self._get_client_ip(request)
        path = request.url.path
        scope, limit = self._get_scope_and_limit(path)
        bucket = self._get_or_create_bucket((client_ip, scope), limit)

        if not bucket.consume():
            retry_after = int(bucket.get_wait_time()) + 1

            logger.warning(
                "Rate limit exceeded",
                extra={
                    "client_ip": client_ip,
                    "path": path,
                    "limit": limit,
                    "retry_after": retry_after,
                    "request_id": getattr(request.state, "request_id", None),
                },
            )

            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                content={
                    "error": "Rate limit exceeded",
                    "limit": limit,
                    "window": "1 minute",
                    "retry_after": retry_after,
                },
                headers={
                    "Retry-After": str(retry_after),
                    "X-RateLimit-Limit": str(limit),
                    "X-RateLimit-Remaining": "0",
                },
            )

        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = str(limit)
        response.headers["X-RateLimit-Remaining"] = str(int(bucket.tokens))
        return response
