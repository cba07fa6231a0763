"""Health Routes — liveness and readiness of the QuoteDesk API.

Invariants:
    - GET /health/ answers 200 whenever the process serves requests
    - GET /health/ready answers 503 until the record services are wired AND the
      record database answers a ping
    - Readiness lists every failed check, not just the first
"""

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from quotedesk.infrastructure import database

router = APIRouter(prefix="/api/v1/health", tags=["health"])

SERVICE_NAME = "quotedesk-api"


@router.get("/")
async def liveness():
    return {"status": "healthy", "service": SERVICE_NAME, "version": "1.0.0"}


@router.get("/ready")
async def readiness(request: Request):
    manager = database.db_manager
    checks = {
        "database": manager is not None and await manager.ping(),
        "record_services": getattr(request.app.state, "records", None) is not None,
    }
    failed = sorted(name for name, ok in checks.items() if not ok)
    if failed:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "failed_checks": failed},
        )
    return {
        "status": "ready",
        "checks": {name: "healthy" for name in checks},
    }
