from __future__ import annotations

from functools import lru_cache

from recrutpro.core.config import settings

from .auth import AUTH_URL, TokenAcquirer
from .endpoints import API_BASE_URL, ENDPOINTS, Endpoint, EndpointConfig, ResolvedEndpoint, resolve
from .errors import (
    AuthError,
    DownstreamError,
    FranceTravailError,
    MissingEndpointError,
    MissingParameterError,
    UnknownEndpointError,
    ValidationError,
)
from .proxy import ProxyHandler, ProxyResponse
from .token_cache import SAFETY_MARGIN_MS, CachedToken, TokenCache


def is_configured() -> bool:
    return bool(settings.france_travail_client_id and settings.france_travail_client_secret)


@lru_cache(maxsize=1)
def get_proxy_handler() -> ProxyHandler:
    """Process-wide handler; its token cache is shared by every request."""
    cache = TokenCache()
    acquirer = TokenAcquirer(
        cache,
        settings.france_travail_client_id,
        settings.france_travail_client_secret,
        timeout_s=settings.france_travail_timeout_s,
    )
    return ProxyHandler(cache, acquirer, timeout_s=settings.france_travail_timeout_s)


__all__ = [
    "API_BASE_URL",
    "AUTH_URL",
    "ENDPOINTS",
    "SAFETY_MARGIN_MS",
    "AuthError",
    "CachedToken",
    "DownstreamError",
    "Endpoint",
    "EndpointConfig",
    "FranceTravailError",
    "MissingEndpointError",
    "MissingParameterError",
    "ProxyHandler",
    "ProxyResponse",
    "ResolvedEndpoint",
    "TokenAcquirer",
    "TokenCache",
    "UnknownEndpointError",
    "ValidationError",
    "get_proxy_handler",
    "is_configured",
    "resolve",
]
