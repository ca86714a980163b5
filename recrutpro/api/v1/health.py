from fastapi import APIRouter

from recrutpro.integrations.france_travail import is_configured

router = APIRouter()


@router.get("/health", summary="Health Check", description="Check the health status of the application.")
async def health_check():
    return {"status": "healthy", "france_travail_configured": is_configured()}
