from __future__ import annotations

from slowapi import Limiter
from slowapi.util import get_remote_address

from jobfit.core.config import settings

limiter = Limiter(key_func=get_remote_address)


def rate_limit(limit: str | None = None):
    """Per-client limit for a route; ``limit`` overrides the global RATE_LIMIT."""
    if settings.rate_limit_enabled:
        return limiter.limit(limit or settings.rate_limit)

    def decorator(func):
        return func

    return decorator


def analysis_rate_limit():
    return rate_limit(settings.analysis_rate_limit)
