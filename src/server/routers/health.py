"""Health check endpoints."""
from fastapi import APIRouter
from typing import Dict, Any
from src.server.settings import settings

router = APIRouter()


@router.get("/healthz")
async def health_check() -> Dict[str, str]:
    """Basic health check endpoint."""
    return {"status": "ok"}


@router.get("/readyz")
async def readiness_check() -> Dict[str, Any]:
    """Readiness check endpoint.

    Checks that the CMS connection settings are present. No request is made
    to the CMS.
    """
    checks = {
        "cms_base_url": bool(settings.OPTIMIZELY_CMS_BASE_URL),
        "cms_token_url": bool(settings.OPTIMIZELY_CMS_TOKEN_URL),
        "cms_credentials": bool(
            settings.OPTIMIZELY_CMS_CLIENT_ID and settings.OPTIMIZELY_CMS_CLIENT_SECRET
        ),
    }

    ready = all(checks.values())

    return {
        "status": "ok" if ready else "not_ready",
        "checks": checks
    }
