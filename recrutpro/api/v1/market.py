from __future__ import annotations

import asyncio

from fastapi import APIRouter, Depends, HTTPException, Query

from recrutpro.integrations.france_travail import FranceTravailError, ProxyHandler, get_proxy_handler, is_configured
from recrutpro.integrations.france_travail import service as france_travail

router = APIRouter()


def _raise_france_travail_error(exc: FranceTravailError) -> None:
    detail = {"error": str(exc)}
    if exc.details:
        detail["details"] = exc.details
    raise HTTPException(status_code=exc.status_code, detail=detail) from exc


@router.get("/market/config")
async def market_config():
    return {
        "configured": is_configured(),
        "regions": france_travail.REGIONS_FRANCE,
        "villes": france_travail.VILLES_06,
    }


@router.get("/market/metiers")
async def market_metiers(
    q: str = Query(min_length=1, max_length=200),
    handler: ProxyHandler = Depends(get_proxy_handler),
):
    try:
        metiers = await france_travail.search_metiers(handler, q)
        competences = []
        if metiers and metiers[0].get("code"):
            competences = await france_travail.get_competences(handler, metiers[0]["code"])
    except FranceTravailError as exc:
        _raise_france_travail_error(exc)
    return {"metiers": metiers, "competences": competences}


@router.get("/market/overview")
async def market_overview(
    code_rome: str = Query(alias="codeRome", min_length=1, max_length=20),
    ville: str = Query(default="Nice"),
    code_region: str = Query(default="93", alias="codeRegion"),
    handler: ProxyHandler = Depends(get_proxy_handler),
):
    city = france_travail.VILLES_06.get(ville)
    if city is None:
        raise HTTPException(status_code=400, detail=f"Ville inconnue : {ville}")
    try:
        stats, entreprises, offres = await asyncio.gather(
            france_travail.get_stats_marche(handler, code_rome, code_region),
            france_travail.search_entreprises(handler, code_rome, city["lat"], city["lon"], 30),
            france_travail.search_offres(handler, code_rome=code_rome, commune=city["cp"]),
        )
    except FranceTravailError as exc:
        _raise_france_travail_error(exc)
    return {"stats": stats, "entreprises": entreprises, "offres": offres}
