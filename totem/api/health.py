"""Health check and API information endpoints."""
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends, Request
from sqlalchemy import text
from sqlalchemy.orm import Session

from totem.core.db import get_session

router = APIRouter(tags=["Health"])


@router.get("/health", summary="Health check")
def health_check() -> dict[str, str]:
    """Basic health check endpoint.

    Returns:
        Status plus the current UTC timestamp
    """
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
    }


@router.get("/health/detailed", summary="Dependency health")
def detailed_health_check(session: Session = Depends(get_session)) -> dict[str, Any]:
    """Check database connectivity.

    Returns:
        Overall status and a per-component breakdown
    """
    health_status: dict[str, Any] = {
        "status": "healthy",
        "components": {},
    }

    try:
        session.execute(text("SELECT 1"))
        health_status["components"]["database"] = {
            "status": "healthy",
            "message": "Database connection successful",
        }
    except Exception as e:
        health_status["status"] = "unhealthy"
        health_status["components"]["database"] = {
            "status": "unhealthy",
            "message": f"Database connection failed: {str(e)}",
        }

    return health_status


@router.get("/", summary="API information")
def api_info(request: Request) -> dict[str, Any]:
    """Describe the API and where its main endpoints live."""
    settings = request.app.state.settings
    return {
        "message": f"{settings.app_name} - catálogo de produtos para totens de autoatendimento",
        "version": settings.app_version,
        "endpoints": {
            "health": "/health",
            "products": "/products",
            "docs": settings.docs_url,
        },
    }
