# /app/routers/teachers_router.py

import logging
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..models.schedule_model import Teacher
from ..services.database_service import DatabaseService, get_db_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "",  # Maps to /api/teachers
    response_model=List[Teacher],
    summary="List Teachers"
)
def list_teachers(
    teacher_type: Optional[Literal["native", "local"]] = Query(None, alias="type"),
    db: DatabaseService = Depends(get_db_service)
):
    try:
        if teacher_type:
            return db.get_teachers_by_type(teacher_type)
        return db.get_teachers()
    except Exception as e:
        logger.exception("Error fetching teachers")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to fetch teachers: {str(e) or 'Unknown error'}"
        )


@router.get(
    "/{teacher_id}",
    response_model=Teacher,
    summary="Get a Teacher",
    responses={404: {"description": "Teacher not found"}}
)
def get_teacher(teacher_id: int, db: DatabaseService = Depends(get_db_service)):
    try:
        teacher = db.get_teacher_by_id(teacher_id)
    except Exception as e:
        logger.exception(f"Error fetching teacher {teacher_id}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to fetch teacher {teacher_id}: {str(e) or 'Unknown error'}"
        )
    if teacher is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Teacher with ID {teacher_id} not found.")
    return teacher
