from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

import httpx

from recrutpro.core.cors import PROXY_CORS_HEADERS
from recrutpro.integrations.france_travail.auth import TokenAcquirer
from recrutpro.integrations.france_travail.endpoints import API_BASE_URL, resolve
from recrutpro.integrations.france_travail.errors import (
    AuthError,
    DownstreamError,
    MissingEndpointError,
    ValidationError,
)
from recrutpro.integrations.france_travail.token_cache import TokenCache

logger = logging.getLogger(__name__)


@dataclass
class ProxyResponse:
    status_code: int
    body: Any = None
    empty: bool = False
    headers: dict[str, str] = field(default_factory=lambda: dict(PROXY_CORS_HEADERS))


class ProxyHandler:
    """Relays ``?endpoint=<name>&...`` calls to the France Travail partner APIs.

    ``handle`` never raises: validation problems become 400s, a downstream
    failure keeps the provider's status code and every other error (token
    exchange included) becomes a 500 carrying the exception message.
    """

    def __init__(
        self,
        cache: TokenCache,
        acquirer: TokenAcquirer,
        *,
        base_url: str = API_BASE_URL,
        timeout_s: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.cache = cache
        self.acquirer = acquirer
        self._base_url = base_url
        self._timeout_s = timeout_s
        self._transport = transport

    async def _token_for(self, scopes: tuple[str, ...]) -> str:
        cached = self.cache.get()
        if cached is not None:
            return cached.token
        return await self.acquirer.acquire(scopes)

    async def fetch(self, endpoint: str, params: Mapping[str, str], *, allow_empty: bool = False) -> Any:
        """GET the partner endpoint and return its decoded JSON.

        With ``allow_empty`` a 2xx answer without a body (offres answers 204
        when nothing matches) yields ``None`` instead of a decoding error.
        """
        resolved = resolve(endpoint, params, base_url=self._base_url)
        token = await self._token_for(resolved.scopes)

        async with httpx.AsyncClient(timeout=self._timeout_s, transport=self._transport) as client:
            response = await client.get(
                resolved.url,
                headers={
                    "Authorization": f"Bearer {token}",
                    "Accept": "application/json",
                },
            )

        if not response.is_success:
            logger.error(
                "france_travail_api_error endpoint=%s status=%s body=%s",
                resolved.endpoint.value,
                response.status_code,
                response.text[:500],
            )
            raise DownstreamError(response.status_code, response.text)
        if allow_empty and not response.content:
            return None
        return response.json()

    async def handle(self, method: str, query: Mapping[str, str]) -> ProxyResponse:
        if method.upper() == "OPTIONS":
            return ProxyResponse(status_code=200, empty=True)

        params = dict(query)
        endpoint = params.pop("endpoint", None)
        try:
            if not endpoint:
                raise MissingEndpointError()
            data = await self.fetch(endpoint, params)
        except ValidationError as exc:
            return ProxyResponse(status_code=exc.status_code, body={"error": str(exc)})
        except DownstreamError as exc:
            return ProxyResponse(
                status_code=exc.upstream_status,
                body={"error": str(exc), "details": exc.details},
            )
        except AuthError as exc:
            return ProxyResponse(status_code=500, body={"error": str(exc), "details": exc.details})
        except Exception as exc:  # noqa: BLE001 - every failure ends the request as a JSON error
            logger.exception("france_travail_proxy_failed endpoint=%s", endpoint)
            return ProxyResponse(status_code=500, body={"error": str(exc)})
        return ProxyResponse(status_code=200, body=data)
