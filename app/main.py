# /app/main.py

import logging
from contextlib import asynccontextmanager
from typing import Optional

# --- Core FastAPI Imports ---
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .config import APP_VERSION, CORS_ORIGINS, LOG_LEVEL

# --- Application-specific Router Imports ---
from .routers import (
    dashboard_router,
    explorer_router,
    monitoring_router,
    schedule_router,
    teachers_router,
)

# --- Service Imports for Startup Logic ---
from .services.database_service import DatabaseService
from .services.metrics_service import METRICS_PATH, MetricsStore

logger = logging.getLogger(__name__)


def configure_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# --- Application Lifecycle Management ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Runs ONCE at startup: find out whether the database is reachable before
    # the first page asks, so the health endpoint reports a real status.
    connected = await app.state.db_service.ping()
    logger.info(f"[DB] Initial ping {'succeeded' if connected else 'failed'}")
    yield


def create_app(db_service: Optional[DatabaseService] = None,
               metrics_store: Optional[MetricsStore] = None) -> FastAPI:
    """
    Builds the FastAPI application. Long-lived collaborators are owned by the
    app (app.state) and can be injected, which is how the tests isolate them.
    """
    app = FastAPI(
        title="Teaching Scheduler API",
        description="Teachers, weekly calendars, table inspection and operational health for the Teaching Scheduler.",
        version=APP_VERSION,
        lifespan=lifespan
    )
    app.state.db_service = db_service if db_service is not None else DatabaseService()
    app.state.metrics = metrics_store if metrics_store is not None else MetricsStore()

    # --- Middleware Configuration ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def count_requests(request: Request, call_next):
        # Scrapes of the metrics endpoint would otherwise inflate the counters.
        if METRICS_PATH not in request.url.path:
            request.app.state.metrics.record_request(request.url.path)
        return await call_next(request)

    # --- API Router Inclusion ---
    app.include_router(monitoring_router.router, prefix="/api", tags=["Monitoring"])
    app.include_router(explorer_router.router, prefix="/api", tags=["Explorer"])
    app.include_router(teachers_router.router, prefix="/api/teachers", tags=["Teachers"])
    app.include_router(schedule_router.router, prefix="/api/schedule", tags=["Schedule"])
    app.include_router(dashboard_router.router, prefix="/api/dashboard", tags=["Dashboard"])

    # --- Root / Liveness Endpoint ---
    @app.get("/", tags=["Health Check"])
    async def read_root():
        """A simple liveness endpoint to confirm the API is online."""
        return {"status": "Teaching Scheduler is running!", "version": app.version}

    return app


configure_logging()

# --- FastAPI Application Instance Creation ---
app = create_app()
