from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Mapping
from urllib.parse import quote, urlencode

from recrutpro.integrations.france_travail.errors import MissingParameterError, UnknownEndpointError

API_BASE_URL = "https://api.francetravail.io/partenaire"

QueryBuilder = Callable[[Mapping[str, str]], list[tuple[str, str]]]


class Endpoint(str, Enum):
    METIERS = "metiers"
    COMPETENCES = "competences"
    LABONNEBOITE = "labonneboite"
    OFFRES = "offres"
    MARCHE = "marche"


@dataclass(frozen=True)
class EndpointConfig:
    scopes: tuple[str, ...]
    path: str
    required_params: tuple[str, ...]
    build_query: QueryBuilder


@dataclass(frozen=True)
class ResolvedEndpoint:
    endpoint: Endpoint
    scopes: tuple[str, ...]
    url: str


def _metiers_query(params: Mapping[str, str]) -> list[tuple[str, str]]:
    return [("libelle", params.get("keyword") or "")]


def _competences_query(params: Mapping[str, str]) -> list[tuple[str, str]]:
    return [("code", params["codeRome"])]


def _labonneboite_query(params: Mapping[str, str]) -> list[tuple[str, str]]:
    return [
        ("rome_codes", params["codeRome"]),
        ("latitude", params["lat"]),
        ("longitude", params["lon"]),
        ("distance", params.get("distance") or "30"),
    ]


def _offres_query(params: Mapping[str, str]) -> list[tuple[str, str]]:
    query = [(name, params[name]) for name in ("motsCles", "codeRome", "commune") if params.get(name)]
    query.append(("range", params.get("range") or "0-14"))
    return query


def _marche_query(params: Mapping[str, str]) -> list[tuple[str, str]]:
    query = [("codeRome", params["codeRome"])]
    if params.get("codeRegion"):
        query.append(("codeRegion", params["codeRegion"]))
    return query


ENDPOINTS: dict[Endpoint, EndpointConfig] = {
    Endpoint.METIERS: EndpointConfig(
        scopes=("scope_rome_metiers", "nomenclatureRome"),
        path="rome-metiers/v1/metiers",
        required_params=(),
        build_query=_metiers_query,
    ),
    Endpoint.COMPETENCES: EndpointConfig(
        scopes=("scope_rome_competences", "nomenclatureRome"),
        path="rome-competences/v1/competence",
        required_params=("codeRome",),
        build_query=_competences_query,
    ),
    Endpoint.LABONNEBOITE: EndpointConfig(
        scopes=("scope_labonneboite_v2", "labonneboite"),
        path="labonneboite/v2/companies",
        required_params=("codeRome", "lat", "lon"),
        build_query=_labonneboite_query,
    ),
    Endpoint.OFFRES: EndpointConfig(
        scopes=("scope_offresdemploi_v2", "o2dsoffre"),
        path="offresdemploi/v2/offres/search",
        required_params=(),
        build_query=_offres_query,
    ),
    Endpoint.MARCHE: EndpointConfig(
        scopes=("scope_infotravail", "offresdemploi"),
        path="infotravail/v1/marche",
        required_params=("codeRome",),
        build_query=_marche_query,
    ),
}


def parse_endpoint(name: str) -> Endpoint:
    try:
        return Endpoint(name)
    except ValueError:
        raise UnknownEndpointError(name) from None


def resolve(endpoint_name: str, params: Mapping[str, str], *, base_url: str = API_BASE_URL) -> ResolvedEndpoint:
    endpoint = parse_endpoint(endpoint_name)
    config = ENDPOINTS[endpoint]
    for name in config.required_params:
        if not params.get(name):
            raise MissingParameterError(name)

    query = urlencode(config.build_query(params), quote_via=quote)
    return ResolvedEndpoint(
        endpoint=endpoint,
        scopes=config.scopes,
        url=f"{base_url}/{config.path}?{query}",
    )
