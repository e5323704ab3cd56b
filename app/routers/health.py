# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers.
# =============================================================================

from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from app.config import settings
from app.dependencies import SupabaseDep
from lib.supabase_client import SupabaseClientError

router = APIRouter()

VERSION = "1.0.0"


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    environment: str
    version: str


class ChecksResponse(BaseModel):
    """Per-dependency readiness."""
    auth: str
    openai: str
    payments: str
    email: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str
    checks: ChecksResponse
    timestamp: str


class LivenessResponse(BaseModel):
    """Liveness check response."""
    status: str
    timestamp: str


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _configured(value: str) -> str:
    return "configured" if value else "not configured"


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint.

    Returns basic health status for load balancers and monitoring.
    """
    return HealthResponse(
        status="healthy",
        timestamp=_now(),
        environment=settings.ENVIRONMENT,
        version=VERSION,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check(supabase: SupabaseDep):
    """
    Readiness check endpoint.

    The Supabase client must initialise; provider keys are reported but a
    missing one only degrades the status, since each handler reports its own
    "not configured" error.
    """
    try:
        supabase.get_client()
        auth = "healthy"
    except SupabaseClientError as e:
        auth = f"unhealthy: {e.message[:50]}"

    checks = ChecksResponse(
        auth=auth,
        openai=_configured(settings.OPENAI_API_KEY),
        payments=_configured(settings.POLAR_ACCESS_TOKEN),
        email=_configured(settings.RESEND_API_KEY),
    )

    if auth != "healthy":
        status = "unavailable"
    elif all(value == "configured" for value in (checks.openai, checks.payments, checks.email)):
        status = "ready"
    else:
        status = "degraded"

    return ReadinessResponse(status=status, checks=checks, timestamp=_now())


@router.get("/health/live", response_model=LivenessResponse)
async def liveness_check():
    """
    Liveness check endpoint.

    Returns whether the service process is alive.
    Used by Kubernetes/Docker for restart decisions.
    """
    return LivenessResponse(status="alive", timestamp=_now())
