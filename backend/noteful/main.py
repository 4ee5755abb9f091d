from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.gzip import GZipMiddleware
from starlette.middleware.trustedhost import TrustedHostMiddleware
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from .api.middleware.security import SecurityMiddleware
from .api.v1.router import api_router
from .config import settings
from .container import build_supabase_services
from .core.errors import ErrorKind, NotefulError
from .db.base import create_store_client
from .utils.logging import get_logger, setup_logging

if TYPE_CHECKING:
    from .container import ServiceContainer

logger = get_logger(__name__)

ERROR_STATUS: dict[ErrorKind, int] = {
    ErrorKind.INVALID_ID: 400,
    ErrorKind.INVALID_REFERENCE: 400,
    ErrorKind.INVALID_SHAPE: 400,
    ErrorKind.MISSING_FIELD: 400,
    ErrorKind.DUPLICATE_KEY: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.CASCADE_FAILURE: 500,
    ErrorKind.STORE_FAILURE: 500,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Services may be injected up front (tests); otherwise wire the store once
    if getattr(app.state, "services", None) is None:
        client = create_store_client(settings)
        app.state.services = build_supabase_services(client, settings)
        logger.info("Store client initialized", extra={"supabase_url": settings.supabase_url})
    yield


def notes_error_handler(request: Request, exc: NotefulError) -> JSONResponse:
    status_code = ERROR_STATUS.get(exc.kind, 500)
    if status_code >= 500:
        logger.error(
            "Request failed",
            extra={"path": request.url.path, "method": request.method, "error": str(exc)},
        )
    return JSONResponse(status_code=status_code, content=exc.to_dict())


def create_app(services: ServiceContainer | None = None) -> FastAPI:
    setup_logging()

    app = FastAPI(
        title="Noteful API",
        debug=settings.debug,
        version="0.1.0",
        root_path=settings.root_path or "",
        lifespan=lifespan,
    )
    app.state.services = services

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_origin_regex=settings.cors_origin_regex,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=[
            "Accept",
            "Accept-Language",
            "Content-Language",
            "Content-Type",
            "Authorization",
            "X-Requested-With",
        ],
        expose_headers=["Location"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    # Proxy headers (X-Forwarded-*) when behind ALB/ingress
    app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=["*"])

    # Trusted hosts (configure in env for production)
    app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.trusted_hosts)

    # GZip compression
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    app.add_middleware(SecurityMiddleware, api_prefix=settings.api_prefix)

    app.add_exception_handler(NotefulError, notes_error_handler)

    app.include_router(api_router, prefix=settings.api_prefix)
    return app


app = create_app()
