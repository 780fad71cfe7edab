"""
Rate Limiting for the Task Report API
=====================================
Implements rate limiting using slowapi.

- Default: RATE_LIMIT_PER_MINUTE per client IP
- /auth/login: LOGIN_RATE_LIMIT (brute force protection)

Storage defaults to in-process memory; point RATE_LIMIT_STORAGE_URI at
redis://... when running several workers.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from fastapi import Request
from fastapi.responses import JSONResponse

from taskreport.core.config import settings
from taskreport.core.exceptions import error_body
from taskreport.core.logging_config import logger


def get_client_identifier(request: Request) -> str:
    """
    Get rate limit key.

    Limits are checked before the authentication gate runs, so callers are
    always keyed by IP address.
    """
    return f"ip:{get_remote_address(request)}"


limiter = Limiter(
    key_func=get_client_identifier,
    default_limits=[f"{settings.RATE_LIMIT_PER_MINUTE}/minute"],
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    strategy="fixed-window",
    enabled=settings.RATE_LIMIT_ENABLED,
)


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    """Return the uniform error body with a Retry-After hint"""
    logger.warning(
        f"[RateLimit] Exceeded for {get_client_identifier(request)}: {exc.detail}"
    )

    return JSONResponse(
        status_code=429,
        content=error_body("Too many requests, please try again later", 429),
        headers={"Retry-After": "60"},
    )


def auth_rate_limit():
    """Rate limit for login attempts"""
    return limiter.limit(settings.LOGIN_RATE_LIMIT, key_func=get_client_identifier)
