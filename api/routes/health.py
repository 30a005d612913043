"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

from fastapi import APIRouter
from pydantic import BaseModel

from shared.config import get_settings

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    auth: str
    wallets: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=get_settings().app_version)


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check() -> ReadinessResponse:
    """
    Readiness check endpoint.

    Reports whether both providers are configured. No network calls are
    made; provider availability is only known per request.
    """
    settings = get_settings()
    auth_ready = bool(
        settings.supabase_url
        and (settings.supabase_anon_key or settings.supabase_service_role_key)
    )
    wallets_ready = bool(settings.privy_app_id and settings.privy_app_secret)

    return ReadinessResponse(
        status="ready" if auth_ready and wallets_ready else "degraded",
        auth="configured" if auth_ready else "missing",
        wallets="configured" if wallets_ready else "missing",
    )
