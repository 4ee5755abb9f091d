from __future__ import annotations

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from noteful.config import settings

router = APIRouter()


@router.get("")
async def health_check():
    """Health check endpoint."""
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "status": "healthy",
            "service": "noteful-api",
            "version": "0.1.0"
        }
    )


@router.get("/ready")
async def readiness_check(request: Request):
    """Readiness check endpoint: services are wired and the store answers."""
    services = getattr(request.app.state, "services", None)
    store_status = "connected"
    if services is None:
        store_status = "not initialized"
    else:
        try:
            await services.users.ping()
        except Exception as e:
            store_status = f"error: {str(e)}"

    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "status": "ready",
            "database": store_status,
            "api_prefix": settings.api_prefix
        }
    )
