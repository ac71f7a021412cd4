"""
Rate Limiting for the ScaffoldAI API
====================================
Implements rate limiting using slowapi with in-memory storage.

The AI endpoints share a per-client-IP limit (AI_RATE_LIMIT, default
20 requests per 15 minutes). File-tree endpoints are not limited.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from fastapi import Request
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.logging_config import logger


def get_client_identifier(request: Request) -> str:
    """Rate limit key: the client's IP address"""
    return f"ip:{get_remote_address(request)}"


limiter = Limiter(
    key_func=get_client_identifier,
    enabled=settings.RATE_LIMIT_ENABLED,
    strategy="fixed-window",
)


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    """
    Custom handler for rate limit exceeded errors.

    Returns the standard error envelope plus a Retry-After header.
    """
    logger.warning(
        f"[RateLimit] Exceeded for {get_client_identifier(request)}: {exc.detail}"
    )

    return JSONResponse(
        status_code=429,
        content={
            "success": False,
            "error": {
                "code": "RATE_LIMITED",
                "message": "Too many requests from this IP, please try again later.",
                "details": {"limit": str(exc.detail)},
            },
        },
        headers={"Retry-After": "900"},
    )


def ai_rate_limit():
    """Rate limit for AI operations"""
    return limiter.limit(settings.AI_RATE_LIMIT)
