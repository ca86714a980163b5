from __future__ import annotations

import os
from typing import Any, Optional

from openai import AsyncOpenAI, NotFoundError

from recrutpro.ai.types import AIProviderError


class OpenAIProvider:
    def __init__(
        self,
        model: str,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_s: float = 60.0,
        max_retries: int = 2,
        temperature: float = 0.7,
    ):
        self._model = model
        self._temperature = temperature
        key = (api_key or os.getenv("OPENAI_API_KEY") or "").strip()
        if not key:
            raise RuntimeError("OPENAI_API_KEY is missing")

        self._client = AsyncOpenAI(
            api_key=key,
            base_url=(base_url or os.getenv("OPENAI_BASE_URL") or None),
            timeout=float(os.getenv("OPENAI_TIMEOUT_S", str(timeout_s))),
            max_retries=int(os.getenv("OPENAI_MAX_RETRIES", str(max_retries))),
        )

    async def complete_json(
        self,
        *,
        prompt: str,
        schema: dict[str, Any],
        system_prompt: str | None = None,
    ) -> str:
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=messages,
                temperature=self._temperature,
                response_format={
                    "type": "json_schema",
                    "json_schema": {"name": "recrutpro_response", "schema": schema},
                },
            )
        except NotFoundError as exc:
            raise AIProviderError(f"Model '{self._model}' not found", model_unavailable=True) from exc

        if not response.choices:
            return ""
        return response.choices[0].message.content or ""
