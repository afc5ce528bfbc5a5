from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from linkhub.core.config import get_settings
from linkhub.core.errors import (
    ConfigurationError,
    LinkHubError,
    PolicyViolation,
    QueryError,
    StorageUnavailable,
)
from linkhub.core.log import configure_logging
from linkhub.routers import categories as categories_router
from linkhub.routers import links as links_router
from linkhub.routers import public as public_router
from linkhub.services.selector import get_data_service, resolve_kind

logger = logging.getLogger(__name__)

_ERROR_STATUS = (
    (ConfigurationError, 500, "configuration_error"),
    (PolicyViolation, 500, "policy_violation"),
    (StorageUnavailable, 503, "storage_unavailable"),
    (QueryError, 502, "query_error"),
)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Inject baseline security headers (anti clickjacking, no sniffing, referrer policy)."""

    def __init__(self, app, *, enforce_hsts: bool) -> None:
        super().__init__(app)
        self._enforce_hsts = enforce_hsts

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer-when-downgrade")
        if self._enforce_hsts:
            response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
        return response


async def _data_error_handler(request: Request, exc: LinkHubError) -> JSONResponse:
    for exc_type, status, code in _ERROR_STATUS:
        if isinstance(exc, exc_type):
            break
    else:
        status, code = 500, "data_error"
    logger.error("%s %s -> %s: %s", request.method, request.url.path, code, exc)
    return JSONResponse({"error": code, "detail": str(exc)}, status_code=status)


def create_app() -> FastAPI:
    """Factory compatible with uvicorn/gunicorn (``--factory``)."""
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Link Hub API")

    allowed_cors = set(settings.cors_origins)
    if settings.app_env != "prod":
        allowed_cors.update(
            {
                "http://localhost:3000",
                "http://127.0.0.1:3000",
                "http://localhost:8000",
                "http://127.0.0.1:8000",
            }
        )
    if allowed_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=sorted(allowed_cors),
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            allow_headers=["*"],
        )
    app.add_middleware(SecurityHeadersMiddleware, enforce_hsts=settings.app_env == "prod")
    app.add_exception_handler(LinkHubError, _data_error_handler)

    @app.get("/healthz")
    def healthz():
        get_data_service()
        return {"ok": True, "dataSource": resolve_kind(get_settings().data_source_type)}

    app.include_router(public_router.router)
    app.include_router(categories_router.router)
    app.include_router(links_router.router)

    logger.info("Link Hub API created (data source: %s)", resolve_kind(settings.data_source_type))
    return app
