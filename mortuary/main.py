# mortuary/main.py
"""
FastAPI application entry point.
Includes API key middleware, error handlers, and all routers.
"""

import time
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from mortuary.config import Settings, settings as default_settings
from mortuary.database import Database
from mortuary.exceptions import MortuaryError
from mortuary.routers import chambers, deceased, health, next_of_kin, releases, services, staff, stats
from mortuary.utils.logger import get_logger

logger = get_logger(__name__)

OPEN_PATHS = {"/api/v1/health", "/docs", "/redoc", "/openapi.json"}


# ── API Key Middleware ───────────────────────────────────────────────────────
class APIKeyMiddleware(BaseHTTPMiddleware):
    """
    Lightweight API key auth for every endpoint except health and docs.
    Send the key as X-API-Key header or api_key query parameter.
    """

    def __init__(self, app, api_key: str):
        super().__init__(app)
        self.api_key = api_key

    async def dispatch(self, request: Request, call_next):
        if request.url.path in OPEN_PATHS:
            return await call_next(request)

        api_key = request.headers.get("X-API-Key") or request.query_params.get("api_key")
        if api_key != self.api_key:
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"detail": "Invalid or missing API key"},
            )
        return await call_next(request)


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """
    Build the application. `database` is normally created on startup from
    settings; tests pass their own handle.
    """
    settings = settings or default_settings

    app = FastAPI(
        title="Mortuary Records API",
        description="Chambers, deceased records, next of kin, services and staff.",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # ── CORS (dashboard frontend) ───────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
        allow_headers=["Content-Type", "Authorization", "X-API-Key"],
    )

    if settings.API_KEY:
        app.add_middleware(APIKeyMiddleware, api_key=settings.API_KEY)

    # ── Request Timing Middleware ────────────────────────────────────────────
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.time()
        response = await call_next(request)
        duration = round((time.time() - start) * 1000, 2)
        logger.debug(f"{request.method} {request.url.path} → {response.status_code} ({duration}ms)")
        return response

    # ── Exception Handlers ───────────────────────────────────────────────────
    @app.exception_handler(MortuaryError)
    async def domain_exception_handler(request: Request, exc: MortuaryError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        problems = [
            f"{'.'.join(str(part) for part in err['loc'] if part != 'body')}: {err['msg']}"
            for err in exc.errors()
        ]
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": "Invalid request", "code": "VALIDATION_ERROR", "errors": problems},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    # ── Routers ──────────────────────────────────────────────────────────────
    app.include_router(chambers.router,    prefix="/api/v1", tags=["Chambers"])
    app.include_router(deceased.router,    prefix="/api/v1", tags=["Deceased"])
    app.include_router(next_of_kin.router, prefix="/api/v1", tags=["Next of kin"])
    app.include_router(services.router,    prefix="/api/v1", tags=["Services"])
    app.include_router(releases.router,    prefix="/api/v1", tags=["Releases"])
    app.include_router(staff.router,       prefix="/api/v1", tags=["Staff"])
    app.include_router(stats.router,       prefix="/api/v1", tags=["Statistics"])
    app.include_router(health.router,      prefix="/api/v1", tags=["Health"])

    # ── Startup / Shutdown ───────────────────────────────────────────────────
    @app.on_event("startup")
    async def startup():
        logger.info("Mortuary backend starting up...")
        app.state.database = database or Database(
            settings.DATABASE_URL,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
        )
        app.state.database.create_tables()
        logger.info("Database tables ready")
        logger.info(f"Listening on http://{settings.BACKEND_HOST}:{settings.BACKEND_PORT}")

    @app.on_event("shutdown")
    async def shutdown():
        logger.info("Mortuary backend shutting down...")
        app.state.database.dispose()

    return app


app = create_app()
