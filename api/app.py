"""
HTTP Application

Builds the FastAPI application: CORS, request logging, JSON error
envelopes, the health check and the project and blog post routers.
"""

import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.routes import blog_posts, projects
from config import settings
from utils.exceptions import DatabaseError, SiteBackendError
from utils.logger import get_logger

logger = get_logger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def create_app(accepted_origins: Optional[List[str]] = None) -> FastAPI:
    """
    Create the site backend application.

    Args:
        accepted_origins: CORS allow-list; defaults to ACCEPTED_ORIGINS.
    """
    app = FastAPI(title="Personal Site Backend", version="1.0.0")
    app.state.startup_time = datetime.now(timezone.utc)

    origins = settings.ACCEPTED_ORIGINS if accepted_origins is None else accepted_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Accept", "Authorization", "Content-Type", "X-CSRF-Token"],
        expose_headers=["Link"],
        max_age=300,
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        message = (f"{request.method} {request.url.path} -> {response.status_code} "
                   f"({elapsed_ms:.1f} ms)")
        if response.status_code >= 500:
            logger.error(message)
        elif response.status_code >= 400:
            logger.warning(message)
        else:
            logger.info(message)
        return response

    # --- Error envelopes ---
    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def malformed_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.error(f"Failed to decode request body for {request.url.path}: {exc.errors()}")
        return _error(status.HTTP_400_BAD_REQUEST, "malformed request body")

    @app.exception_handler(DatabaseError)
    async def database_error(request: Request, exc: DatabaseError) -> JSONResponse:
        logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "database error")

    @app.exception_handler(SiteBackendError)
    async def backend_error(request: Request, exc: SiteBackendError) -> JSONResponse:
        logger.error(f"Error on {request.method} {request.url.path}: {exc}")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "internal server error")

    # --- Routes ---
    @app.get("/healthcheck")
    def healthcheck() -> Dict[str, Any]:
        now = datetime.now(timezone.utc)
        startup = app.state.startup_time
        return {
            "current_time": now.isoformat(),
            "startup_time": startup.isoformat(),
            "uptime_seconds": int((now - startup).total_seconds()),
        }

    app.include_router(projects.router)
    app.include_router(blog_posts.router)

    return app
