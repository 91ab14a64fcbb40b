"""
Name: FastAPI Application Entry Point

Responsibilities:
  - Build the FastAPI application (create_app) with metadata and lifespan
  - Configure middleware (CORS, request context)
  - Mount the accounts router under the /api/v1 prefix
  - Expose health check and metrics endpoints

Collaborators:
  - FastAPI: ASGI web framework
  - CORSMiddleware: Cross-Origin Resource Sharing handler
  - RequestContextMiddleware: Request ID and logging context
  - interfaces.api.http.router: accounts endpoints

Constraints:
  - Read-only API: only GET/OPTIONS are allowed by CORS
  - Authentication happens upstream; the principal arrives in request.state

Notes:
  - Middleware order matters: RequestContext -> CORS -> routes
  - /healthz follows Kubernetes health check convention
  - /metrics exposes Prometheus metrics
  - In test/ci the DB pool is not initialized (in-memory adapters)
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from ..container import get_account_repository
from ..crosscutting.config import get_settings
from ..crosscutting.logger import logger
from ..crosscutting.metrics import get_metrics_response
from ..crosscutting.middleware import RequestContextMiddleware
from ..infrastructure.db.pool import close_pool, init_pool
from ..interfaces.api.http.router import build_router
from .exception_handlers import register_exception_handlers

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle. Validates settings and initializes pool."""
    settings = get_settings()
    settings.validate_production_requirements()

    if not settings.is_test():
        init_pool(
            database_url=settings.database_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
        )
    try:
        logger.info(
            "Accounts API starting up",
            extra={
                "app_env": settings.app_env,
                "local_host": settings.local_host,
                "refresh_queue": settings.refresh_queue_name,
                "db_pool_min": settings.db_pool_min_size,
                "db_pool_max": settings.db_pool_max_size,
            },
        )
        yield
    finally:
        close_pool()
        logger.info("Accounts API shutting down")


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title="Accounts API",
        version="0.1.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "accounts", "description": "Local and remote accounts"},
            {"name": "videos", "description": "Videos of an account"},
            {"name": "video-channels", "description": "Channels of an account"},
            {"name": "video-playlists", "description": "Playlists of an account"},
            {"name": "ratings", "description": "Ratings (owner only)"},
        ],
    )

    # R: Middleware order (bottom = first to execute):
    # 1. CORSMiddleware - handles preflight
    # 2. RequestContextMiddleware - sets request_id
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_allowed_origins_list(),
        allow_credentials=False,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Request-Id"],
    )

    app.include_router(build_router(), prefix=API_PREFIX)
    register_exception_handlers(app)

    @app.get("/healthz")
    def healthz(request: Request):
        """
        R: Health check that verifies the account store.

        Returns:
            ok: True if the store answers
            db: "connected" or "disconnected"
            request_id: Correlation ID for this request
        """
        db_status = "disconnected"
        try:
            if get_account_repository().ping():
                db_status = "connected"
        except Exception as e:
            logger.warning("Health check: DB unavailable", extra={"error": str(e)})

        return {
            "ok": db_status == "connected",
            "db": db_status,
            "request_id": getattr(request.state, "request_id", None),
        }

    @app.get("/metrics")
    def metrics():
        """R: Expose Prometheus metrics (text format)."""
        body, content_type = get_metrics_response()
        return Response(content=body, media_type=content_type)

    return app


app = create_app()
