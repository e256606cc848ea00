"""Rate limiting using slowapi.

Every task endpoint costs at least one Gemini call, so clients are limited
per remote address.
"""

from fastapi import Request
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address

from recipeai.config import settings

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[f"{settings.rate_limit_per_hour}/hour"],
    storage_uri="memory://",
)


def get_rate_limit_exceeded_handler():
    """Get rate limit exceeded handler."""
    return _rate_limit_exceeded_handler


def rate_limit_dependency(request: Request) -> None:
    """
    Rate limit dependency for FastAPI.

    Raises:
        RateLimitExceeded: If rate limit is exceeded
    """
    # slowapi only exposes the check through its middleware/decorator; evaluate
    # the default limits directly so routes can opt in with Depends().
    limiter._check_request_limit(request, endpoint_func=None)
