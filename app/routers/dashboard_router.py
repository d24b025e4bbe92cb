# /app/routers/dashboard_router.py

# --- Core FastAPI Imports ---
import logging

from fastapi import APIRouter, Depends, HTTPException, status

# --- Service and Model Imports ---
from ..services import workload_service
from ..services.database_service import DatabaseService, get_db_service
from ..models.dashboard_model import WorkloadSummary

logger = logging.getLogger(__name__)

router = APIRouter()

# --- Endpoint Definition ---
@router.get(
    "/workload",
    response_model=WorkloadSummary,
    summary="Get Teacher Workload",
    description="Classes per teacher and the NT-Led split for the statistical dashboard."
)
def get_workload(db: DatabaseService = Depends(get_db_service)):
    try:
        return workload_service.get_dashboard_workload(db=db)
    except Exception as e:
        logger.exception("Error fetching dashboard data")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to load dashboard data: {str(e) or 'Unknown error'}"
        )
