# app/api/routers/health.py

from datetime import datetime, timezone

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
async def health(request: Request):
    """Liveness check. Public."""
    settings = request.app.state.settings
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "correlation_id": request.state.correlation_id,
        "environment": settings.environment,
        "version": settings.version,
    }
