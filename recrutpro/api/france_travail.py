from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response

from recrutpro.integrations.france_travail import ProxyHandler, get_proxy_handler

router = APIRouter()


@router.api_route("/api/france-travail", methods=["GET", "POST", "OPTIONS"], include_in_schema=False)
async def france_travail_proxy(request: Request, handler: ProxyHandler = Depends(get_proxy_handler)):
    result = await handler.handle(request.method, dict(request.query_params))
    if result.empty:
        return Response(status_code=result.status_code, headers=result.headers)
    return JSONResponse(result.body, status_code=result.status_code, headers=result.headers)
