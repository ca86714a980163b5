from __future__ import annotations

import os
from typing import Any, Optional

import httpx

from recrutpro.ai.types import AIProviderError

_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
_UNSUPPORTED_SCHEMA_KEYS = {"additionalProperties", "title", "$schema"}


def to_gemini_schema(schema: dict[str, Any]) -> dict[str, Any]:
    """Translate a JSON schema into the OpenAPI subset accepted by ``responseSchema``."""
    converted: dict[str, Any] = {}
    for key, value in schema.items():
        if key in _UNSUPPORTED_SCHEMA_KEYS:
            continue
        if key == "type" and isinstance(value, str):
            converted[key] = value.upper()
        elif key == "properties" and isinstance(value, dict):
            converted[key] = {name: to_gemini_schema(sub) for name, sub in value.items()}
        elif key == "items" and isinstance(value, dict):
            converted[key] = to_gemini_schema(value)
        else:
            converted[key] = value
    return converted


class GeminiProvider:
    def __init__(
        self,
        model: str,
        api_key: Optional[str] = None,
        timeout_s: float = 60.0,
        temperature: float = 0.7,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._model = model
        self._temperature = temperature
        self._timeout = httpx.Timeout(float(os.getenv("GEMINI_TIMEOUT_S", str(timeout_s))), connect=10.0)
        self._transport = transport
        self._api_key = (api_key or os.getenv("GEMINI_API_KEY") or "").strip()
        if not self._api_key:
            raise RuntimeError("GEMINI_API_KEY is missing")

    async def complete_json(
        self,
        *,
        prompt: str,
        schema: dict[str, Any],
        system_prompt: str | None = None,
    ) -> str:
        payload: dict[str, Any] = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": self._temperature,
                "responseMimeType": "application/json",
                "responseSchema": to_gemini_schema(schema),
            },
        }
        if system_prompt:
            payload["systemInstruction"] = {"parts": [{"text": system_prompt}]}

        endpoint = f"{_BASE_URL}/models/{self._model}:generateContent"
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            response = await client.post(endpoint, params={"key": self._api_key}, json=payload)

        if response.status_code == 404:
            raise AIProviderError(f"Model '{self._model}' not found", model_unavailable=True)
        if not response.is_success:
            raise AIProviderError(f"Gemini request failed with status {response.status_code}")

        data = response.json()
        try:
            parts = data["candidates"][0]["content"]["parts"]
        except (KeyError, IndexError, TypeError):
            return ""
        return "".join(part.get("text", "") for part in parts)
