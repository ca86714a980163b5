from typing import Any, Protocol


class AIProviderError(RuntimeError):
    def __init__(self, message: str, *, model_unavailable: bool = False):
        super().__init__(message)
        self.model_unavailable = model_unavailable


class AIClient(Protocol):
    async def complete_json(
        self,
        *,
        prompt: str,
        schema: dict[str, Any],
        system_prompt: str | None = None,
    ) -> str:
        """Return the raw JSON text produced for ``prompt`` under ``schema``."""
        ...
