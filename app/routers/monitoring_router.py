# /app/routers/monitoring_router.py

import logging

from fastapi import APIRouter, Depends, Query, Request, Response
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST

from ..models.health_model import HealthSnapshot
from ..services import health_service
from ..services.database_service import DatabaseService, get_db_service
from ..services.metrics_service import MetricsStore

logger = logging.getLogger(__name__)

router = APIRouter()


def get_metrics_store(request: Request) -> MetricsStore:
    return request.app.state.metrics


@router.get(
    "/metrics",
    response_class=Response,
    summary="Prometheus Metrics",
    description="Process gauges and request counters in the Prometheus text format."
)
def get_metrics(store: MetricsStore = Depends(get_metrics_store)):
    # Requests to this endpoint are skipped by the counting middleware.
    return Response(content=store.render(), media_type=CONTENT_TYPE_LATEST)


@router.get(
    "/health",
    response_model=HealthSnapshot,
    response_model_exclude_none=True,
    summary="Application Health",
    responses={500: {"description": "The health snapshot could not be assembled"}}
)
async def get_health(
    detailed: bool = Query(False),
    check_database: bool = Query(False, alias="checkDatabase"),
    db: DatabaseService = Depends(get_db_service)
):
    """
    Reports status, version, uptime and database state. `checkDatabase=true`
    adds a live ping; `detailed=true` adds host and process resource usage.
    """
    try:
        return await health_service.get_health(db, detailed=detailed, check_database=check_database)
    except Exception as e:
        logger.exception("Health check failed")
        return JSONResponse(
            status_code=500,
            content={
                "status": "error",
                "error": health_service.error_message(e),
                "timestamp": health_service.utc_timestamp(),
            },
        )


@router.post(
    "/database/reconnect",
    summary="Reconnect to the Database",
    description="Leaves offline mode and attempts a fresh connection."
)
async def reconnect_database(db: DatabaseService = Depends(get_db_service)):
    connected = await db.reconnect()
    return {"connected": connected, "status": db.get_status().value}
