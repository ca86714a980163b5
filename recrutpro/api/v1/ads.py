from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request

from recrutpro.ai.factory import get_ai_client
from recrutpro.ai.types import AIClient
from recrutpro.constants import form_options
from recrutpro.core.rate_limit import rate_limit
from recrutpro.schemas.ads import GenerationResponse, JobFormData, JobSuggestion, SuggestRequest
from recrutpro.services.ad_service import AdGenerationError, generate_job_ads, suggest_job_details

router = APIRouter()


def ai_client_dependency() -> AIClient:
    try:
        return get_ai_client()
    except (RuntimeError, ValueError) as exc:
        raise HTTPException(status_code=503, detail="Service IA non configuré.") from exc


def _raise_generation_error(exc: AdGenerationError) -> None:
    raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc


@router.get("/ads/options")
async def ads_options():
    return form_options()


@router.post("/ads/generate", response_model=GenerationResponse)
@rate_limit()
async def ads_generate(request: Request, payload: JobFormData, client: AIClient = Depends(ai_client_dependency)):
    _ = request
    try:
        return await generate_job_ads(payload, client=client)
    except AdGenerationError as exc:
        _raise_generation_error(exc)


@router.post("/ads/suggest", response_model=JobSuggestion, response_model_exclude_none=True)
@rate_limit()
async def ads_suggest(request: Request, payload: SuggestRequest, client: AIClient = Depends(ai_client_dependency)):
    _ = request
    try:
        return await suggest_job_details(payload.job_title, client=client)
    except AdGenerationError as exc:
        _raise_generation_error(exc)
