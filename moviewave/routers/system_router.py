from datetime import datetime

from fastapi import APIRouter, Depends

from ..config import Settings, get_settings
from ..exceptions import NotFound

router = APIRouter(tags=["system"])

VERSION = "1.0.0"


def _presence(value) -> str:
    return "configured" if value else "missing"


@router.get("/")
async def root():
    return {"message": "MovieWave API connected to Supabase, Brevo and Pexels"}


@router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "version": VERSION
    }


@router.get("/debug")
async def debug(settings: Settings = Depends(get_settings)):
    """Configuration presence report, never values. Hidden in production."""
    if settings.is_production:
        raise NotFound("Not Found")
    return {
        "environment": settings.APP_ENV,
        "port": settings.PORT,
        "frontendUrl": settings.FRONTEND_URL,
        "pexelsKey": _presence(settings.PEXELS_API_KEY),
        "brevoKey": _presence(settings.BREVO_API_KEY),
        "supabaseUrl": _presence(settings.SUPABASE_URL),
        "serviceRoleKey": _presence(settings.SUPABASE_SERVICE_ROLE_KEY),
    }
