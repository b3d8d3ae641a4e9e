"""Health & Readiness Probes — liveness and readiness endpoints.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 unless the store answers and order exports
      can be written (every order commit needs both)
"""

import os

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

import storefront.infrastructure.database as database
from storefront.config import Settings, get_settings

router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    return {"status": "healthy", "service": "storefront-api"}


@router.get("/ready")
async def readiness_check(settings: Settings = Depends(get_settings)):
    manager = database.db_manager
    checks = {
        "database": (
            "healthy" if manager and await manager.health_check() else "unavailable"
        ),
        "export_dir": (
            "writable" if _export_dir_writable(settings.order_export_path)
            else "not_writable"
        ),
    }
    if checks["database"] != "healthy" or checks["export_dir"] != "writable":
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "checks": checks},
        )
    return {"status": "ready", "checks": checks}


def _export_dir_writable(export_path: str) -> bool:
    """The nearest existing ancestor must be a writable directory (missing dirs get created)."""
    path = os.path.dirname(os.path.abspath(export_path))
    while not os.path.exists(path):
        path = os.path.dirname(path)
    return os.path.isdir(path) and os.access(path, os.W_OK)
