from __future__ import annotations

import logging
from typing import Sequence

import httpx

from recrutpro.integrations.france_travail.errors import AuthError
from recrutpro.integrations.france_travail.token_cache import TokenCache

logger = logging.getLogger(__name__)

AUTH_URL = "https://entreprise.francetravail.fr/connexion/oauth2/access_token?realm=/partenaire"


class TokenAcquirer:
    """Client-credentials exchange against the France Travail identity provider."""

    def __init__(
        self,
        cache: TokenCache,
        client_id: str | None,
        client_secret: str | None,
        *,
        auth_url: str = AUTH_URL,
        timeout_s: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._cache = cache
        self._client_id = client_id or ""
        self._client_secret = client_secret or ""
        self._auth_url = auth_url
        self._timeout_s = timeout_s
        self._transport = transport

    async def acquire(self, scopes: Sequence[str]) -> str:
        # Missing credentials are sent as-is; the provider's refusal surfaces as an AuthError.
        form = {
            "grant_type": "client_credentials",
            "client_id": self._client_id,
            "client_secret": self._client_secret,
            "scope": " ".join(scopes),
        }
        async with httpx.AsyncClient(timeout=self._timeout_s, transport=self._transport) as client:
            response = await client.post(
                self._auth_url,
                data=form,
                headers={"Content-Type": "application/x-www-form-urlencoded"},
            )

        if not response.is_success:
            logger.error(
                "france_travail_auth_failed status=%s body_len=%s",
                response.status_code,
                len(response.text),
            )
            raise AuthError(response.status_code, response.text)

        payload = response.json()
        token = payload["access_token"]
        self._cache.set(token, int(payload["expires_in"]))
        logger.info("france_travail_token_acquired scopes=%s expires_in=%s", form["scope"], payload["expires_in"])
        return token
