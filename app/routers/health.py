# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers.
# =============================================================================

from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from app.config import settings
from core.services.storage_service import bucket_name

router = APIRouter()


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    environment: str
    data_backend: str
    version: str


class ChecksResponse(BaseModel):
    """Individual service checks."""
    database: str
    storage: str
    auth: str
    tables: dict[str, bool] = {}
    buckets: dict[str, bool] = {}


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str
    checks: ChecksResponse
    timestamp: str


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


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
        data_backend=settings.DATA_BACKEND,
        version="1.0.0",
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check():
    """
    Readiness check endpoint.

    Probes each content table and looks for the site's storage buckets.
    Missing tables or buckets mark the API as degraded, which usually
    means the schema migration or bucket setup has not been run yet.
    """
    from lib.supabase_client import SupabaseClient
    from core.services.supabase_repository import CONTENT_TABLES

    checks = ChecksResponse(database="unknown", storage="unknown", auth="unknown")

    checks.tables = {table: SupabaseClient.table_exists(table) for table in CONTENT_TABLES}
    missing_tables = [table for table, ok in checks.tables.items() if not ok]
    checks.database = (
        f"missing tables: {', '.join(missing_tables)}" if missing_tables else "healthy"
    )

    try:
        client = SupabaseClient.get_client()
        existing = {bucket_name(b) for b in client.storage.list_buckets() or []}
        checks.buckets = {name: name in existing for name in settings.site_buckets}
        missing_buckets = [name for name, ok in checks.buckets.items() if not ok]
        checks.storage = (
            f"missing buckets: {', '.join(missing_buckets)}" if missing_buckets else "healthy"
        )
    except Exception as e:
        checks.storage = f"unhealthy: {str(e)[:50]}"

    if settings.AUTH_PUBLISHABLE_KEY and settings.SUPABASE_JWT_SECRET:
        checks.auth = "configured"
    else:
        checks.auth = "not configured"

    all_healthy = checks.database == "healthy" and checks.storage == "healthy"

    return ReadinessResponse(
        status="ready" if all_healthy else "degraded",
        checks=checks,
        timestamp=_now(),
    )
