from recrutpro.ai.config import load_ai_config
from recrutpro.ai.types import AIClient

from recrutpro.ai.providers.openai_provider import OpenAIProvider
from recrutpro.ai.providers.gemini_provider import GeminiProvider


def get_ai_client() -> AIClient:
    cfg = load_ai_config()

    if cfg.provider == "openai":
        return OpenAIProvider(model=cfg.model)

    if cfg.provider == "gemini":
        return GeminiProvider(model=cfg.model)

    raise ValueError(f"Unsupported AI_PROVIDER='{cfg.provider}'")
