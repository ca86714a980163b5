from __future__ import annotations

from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from recrutpro.core.config import settings


def client_address(request: Request) -> str:
    # Deployed behind a reverse proxy: the first forwarded hop is the browser.
    forwarded = request.headers.get("x-forwarded-for", "")
    first_hop = forwarded.split(",")[0].strip()
    return first_hop or get_remote_address(request)


limiter = Limiter(key_func=client_address)


def rate_limit(limit: str | None = None):
    if settings.rate_limit_enabled:
        return limiter.limit(limit or settings.rate_limit)

    def decorator(func):
        return func

    return decorator
