from __future__ import annotations

import json
import logging
import re
import time
import uuid
from typing import Any

from pydantic import ValidationError

from recrutpro.ai.factory import get_ai_client
from recrutpro.ai.types import AIClient, AIProviderError
from recrutpro.schemas.ads import GenerationResponse, JobFormData, JobSuggestion
from recrutpro.services.ad_prompts import (
    GENERATION_SCHEMA,
    SUGGESTION_SCHEMA,
    SYSTEM_INSTRUCTION,
    build_generation_prompt,
    build_suggestion_prompt,
)

logger = logging.getLogger(__name__)

_DEFAULT_IMAGE = "https://images.unsplash.com/photo-1497215728101-856f4ea42174?w=800&h=450&fit=crop"
_CONSTRUCTION = "https://images.unsplash.com/photo-1504307651254-35680f356dfd?w=800&h=450&fit=crop"
_LOGISTICS = "https://images.unsplash.com/photo-1586528116311-ad8dd3c8310d?w=800&h=450&fit=crop"
_RETAIL = "https://images.unsplash.com/photo-1556742049-0cfed4f6a45d?w=800&h=450&fit=crop"
_HEALTH = "https://images.unsplash.com/photo-1519494026892-80bbd2d6fd0d?w=800&h=450&fit=crop"
_TECH = "https://images.unsplash.com/photo-1517694712202-14dd9538aa97?w=800&h=450&fit=crop"

# Checked in order; the first keyword found as a whole word in the sector wins.
_SECTOR_IMAGES: tuple[tuple[str, str], ...] = (
    ("btp", _CONSTRUCTION),
    ("bâtiment", _CONSTRUCTION),
    ("construction", _CONSTRUCTION),
    ("logistique", _LOGISTICS),
    ("transport", _LOGISTICS),
    ("industrie", "https://images.unsplash.com/photo-1581091226825-a6a2a5aee158?w=800&h=450&fit=crop"),
    ("commerce", _RETAIL),
    ("vente", _RETAIL),
    ("restauration", "https://images.unsplash.com/photo-1517248135467-4c7edcad34c4?w=800&h=450&fit=crop"),
    ("hôtellerie", "https://images.unsplash.com/photo-1566073771259-6a8506099945?w=800&h=450&fit=crop"),
    ("santé", _HEALTH),
    ("médical", _HEALTH),
    ("it", _TECH),
    ("tech", _TECH),
    ("informatique", _TECH),
    ("agriculture", "https://images.unsplash.com/photo-1500937386664-56d1dfef3854?w=800&h=450&fit=crop"),
    ("nettoyage", "https://images.unsplash.com/photo-1581578731548-c64695cc6952?w=800&h=450&fit=crop"),
    ("sécurité", "https://images.unsplash.com/photo-1555817128-342e1c8b3101?w=800&h=450&fit=crop"),
)


class AdGenerationError(RuntimeError):
    def __init__(self, message: str, status_code: int = 502):
        super().__init__(message)
        self.status_code = status_code


def job_image_url(sector: str) -> str:
    sector_lower = (sector or "").lower()
    for keyword, url in _SECTOR_IMAGES:
        if re.search(rf"\b{re.escape(keyword)}\b", sector_lower):
            return url
    return _DEFAULT_IMAGE


def _resolve_client(client: AIClient | None) -> AIClient:
    if client is not None:
        return client
    try:
        return get_ai_client()
    except (RuntimeError, ValueError) as exc:
        logger.error("ai_client_unavailable: %s", exc)
        raise AdGenerationError("Service IA non configuré.", status_code=503) from exc


async def _complete(client: AIClient, *, prompt: str, schema: dict[str, Any], system_prompt: str | None) -> dict[str, Any]:
    try:
        text = await client.complete_json(prompt=prompt, schema=schema, system_prompt=system_prompt)
    except AIProviderError as exc:
        logger.error("ai_completion_failed model_unavailable=%s: %s", exc.model_unavailable, exc)
        if exc.model_unavailable:
            raise AdGenerationError("Service IA temporairement indisponible (Erreur Modèle).", status_code=503) from exc
        raise AdGenerationError(str(exc)) from exc

    if not text or not text.strip():
        raise AdGenerationError("L'IA n'a renvoyé aucun texte.")
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        logger.warning("ai_completion_invalid_json len=%s", len(text))
        raise AdGenerationError("Réponse IA illisible.") from exc
    if not isinstance(payload, dict):
        raise AdGenerationError("Réponse IA illisible.")
    return payload


async def suggest_job_details(job_title: str, client: AIClient | None = None) -> JobSuggestion:
    payload = await _complete(
        _resolve_client(client),
        prompt=build_suggestion_prompt(job_title),
        schema=SUGGESTION_SCHEMA,
        system_prompt=None,
    )
    try:
        return JobSuggestion.model_validate(payload)
    except ValidationError as exc:
        raise AdGenerationError("Réponse IA incomplète.") from exc


async def generate_job_ads(form: JobFormData, client: AIClient | None = None) -> GenerationResponse:
    started = time.perf_counter()
    payload = await _complete(
        _resolve_client(client),
        prompt=build_generation_prompt(form),
        schema=GENERATION_SCHEMA,
        system_prompt=SYSTEM_INSTRUCTION,
    )
    try:
        result = GenerationResponse.model_validate(payload)
    except ValidationError as exc:
        logger.warning("ad_generation_invalid_schema errors=%s", exc.error_count())
        raise AdGenerationError("Réponse IA incomplète.") from exc

    for ad in result.ads:
        if ad.channel == "Social":
            ad.image_url = job_image_url(form.sector)
            break

    result.timestamp = int(time.time() * 1000)
    result.id = uuid.uuid4().hex[:8]
    logger.info(
        "ad_generation_done id=%s ads=%s latency_ms=%s",
        result.id,
        len(result.ads),
        int((time.perf_counter() - started) * 1000),
    )
    return result
