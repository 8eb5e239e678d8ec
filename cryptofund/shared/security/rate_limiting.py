"""
Rate limiting with slowapi.

Requests are counted per caller: the ``X-User-Id`` set by the gateway
when present, else the client address. LLM-backed routes use
``HEAVY_RATE_LIMIT`` on top of the default.
"""

from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.requests import Request
from starlette.responses import JSONResponse

from cryptofund.core.config import settings

DEFAULT_RATE_LIMIT = settings.rate_limit_default
HEAVY_RATE_LIMIT = settings.rate_limit_heavy


def caller_key(request: Request) -> str:
    """Bucket key for a request."""
    user_id = request.headers.get("X-User-Id", "").strip()
    if user_id:
        return f"user:{user_id}"
    return f"addr:{get_remote_address(request)}"


limiter = Limiter(key_func=caller_key, default_limits=[DEFAULT_RATE_LIMIT])


async def rate_limit_exceeded_handler(
    _request: Request, exc: RateLimitExceeded
) -> JSONResponse:
    """Return 429 in the service's error shape."""
    return JSONResponse(
        status_code=429,
        content={"error": "Rate limit exceeded", "detail": str(exc.detail)},
    )
