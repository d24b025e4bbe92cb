# /app/routers/schedule_router.py

import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import NoSuchTableError

from ..models.schedule_model import WeeklySchedule
from ..services import schedule_service
from ..services.database_helpers.fallback_data import is_calendar_table
from ..services.database_service import DatabaseService, get_db_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/tables", response_model=List[str], summary="List Calendar Tables")
def list_calendar_tables(db: DatabaseService = Depends(get_db_service)):
    try:
        return db.get_calendar_tables()
    except Exception as e:
        logger.exception("Error discovering calendar tables")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to list calendar tables: {str(e) or 'Unknown error'}"
        )


@router.get(
    "",  # Maps to /api/schedule
    response_model=WeeklySchedule,
    summary="Get Weekly Schedule",
    description="Classes for the week containing `week_start`, optionally narrowed to one teacher or one calendar."
)
def get_weekly_schedule(
    week_start: Optional[date] = Query(None, description="Any day of the wanted week; defaults to today."),
    teacher: Optional[str] = None,
    table: Optional[str] = None,
    db: DatabaseService = Depends(get_db_service)
):
    if table is not None and not is_calendar_table(table):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Table {table} is not a calendar table."
        )
    try:
        return schedule_service.get_weekly_schedule(
            db=db,
            week_start=week_start or date.today(),
            teacher_name=teacher,
            table_name=table
        )
    except NoSuchTableError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Table {table} not found.")
    except Exception as e:
        logger.exception("Error building weekly schedule")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to fetch the schedule: {str(e) or 'Unknown error'}"
        )
