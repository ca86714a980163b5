from __future__ import annotations

import logging
from typing import Any

from recrutpro.integrations.france_travail.errors import DownstreamError
from recrutpro.integrations.france_travail.proxy import ProxyHandler

logger = logging.getLogger(__name__)

REGIONS_FRANCE: dict[str, str] = {
    "01": "Guadeloupe",
    "02": "Martinique",
    "03": "Guyane",
    "04": "La Réunion",
    "06": "Mayotte",
    "11": "Île-de-France",
    "24": "Centre-Val de Loire",
    "27": "Bourgogne-Franche-Comté",
    "28": "Normandie",
    "32": "Hauts-de-France",
    "44": "Grand Est",
    "52": "Pays de la Loire",
    "53": "Bretagne",
    "75": "Nouvelle-Aquitaine",
    "76": "Occitanie",
    "84": "Auvergne-Rhône-Alpes",
    "93": "Provence-Alpes-Côte d'Azur",
    "94": "Corse",
}

VILLES_06: dict[str, dict[str, Any]] = {
    "Nice": {"lat": 43.7102, "lon": 7.2620, "cp": "06000"},
    "Cannes": {"lat": 43.5528, "lon": 7.0174, "cp": "06400"},
    "Antibes": {"lat": 43.5808, "lon": 7.1239, "cp": "06600"},
    "Grasse": {"lat": 43.6589, "lon": 6.9226, "cp": "06130"},
    "Cagnes-sur-Mer": {"lat": 43.6645, "lon": 7.1482, "cp": "06800"},
    "Menton": {"lat": 43.7747, "lon": 7.5006, "cp": "06500"},
    "Vence": {"lat": 43.7225, "lon": 7.1119, "cp": "06140"},
    "Mougins": {"lat": 43.6008, "lon": 6.9956, "cp": "06250"},
}


async def _fetch_or_none(handler: ProxyHandler, endpoint: str, params: dict[str, str]) -> Any | None:
    try:
        return await handler.fetch(endpoint, params, allow_empty=True)
    except DownstreamError as exc:
        logger.warning("france_travail_lookup_empty endpoint=%s status=%s", endpoint, exc.upstream_status)
        return None


async def search_metiers(handler: ProxyHandler, keyword: str) -> list[dict[str, Any]]:
    data = await _fetch_or_none(handler, "metiers", {"keyword": keyword})
    return data if isinstance(data, list) else []


async def get_competences(handler: ProxyHandler, code_rome: str) -> list[dict[str, Any]]:
    data = await _fetch_or_none(handler, "competences", {"codeRome": code_rome})
    return data if isinstance(data, list) else []


async def search_entreprises(
    handler: ProxyHandler,
    code_rome: str,
    latitude: float,
    longitude: float,
    distance: int = 30,
) -> list[dict[str, Any]]:
    data = await _fetch_or_none(
        handler,
        "labonneboite",
        {"codeRome": code_rome, "lat": str(latitude), "lon": str(longitude), "distance": str(distance)},
    )
    if not isinstance(data, dict):
        return []
    return data.get("companies") or []


async def get_stats_marche(
    handler: ProxyHandler,
    code_rome: str,
    code_region: str | None = None,
) -> dict[str, Any] | None:
    params = {"codeRome": code_rome}
    if code_region:
        params["codeRegion"] = code_region
    data = await _fetch_or_none(handler, "marche", params)
    return data if isinstance(data, dict) else None


def _offres_total(data: dict[str, Any], offres: list[Any]) -> int:
    try:
        total = data["filtresPossibles"][0]["agregation"][0]["nbResultats"]
    except (KeyError, IndexError, TypeError):
        total = None
    return int(total) if total else len(offres)


async def search_offres(
    handler: ProxyHandler,
    *,
    mots_cles: str | None = None,
    code_rome: str | None = None,
    commune: str | None = None,
    range_: str | None = None,
) -> dict[str, Any]:
    params = {
        key: value
        for key, value in (
            ("motsCles", mots_cles),
            ("codeRome", code_rome),
            ("commune", commune),
            ("range", range_),
        )
        if value
    }
    data = await _fetch_or_none(handler, "offres", params)
    if not isinstance(data, dict):
        return {"offres": [], "total": 0}
    offres = data.get("resultats") or []
    return {"offres": offres, "total": _offres_total(data, offres)}
