# /app/routers/explorer_router.py

"""
Debugging endpoints for looking at raw tables. Column names are read off the
returned rows, so an empty table reports no columns.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import NoSuchTableError

from ..models.schedule_model import TableDataResponse, TableListResponse
from ..services.database_service import DatabaseService, get_db_service

logger = logging.getLogger(__name__)

router = APIRouter()

CHECK_TEACHERS_SAMPLE_SIZE = 3


@router.get("/explorer/tables", response_model=TableListResponse, summary="List Database Tables")
def list_tables(db: DatabaseService = Depends(get_db_service)):
    try:
        tables, source = db.list_tables()
    except Exception as e:
        logger.exception("Error listing tables")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e) or "Unknown error")
    return TableListResponse(tables=tables, source=source)


@router.get(
    "/explorer/tables/{table_name}",
    response_model=TableDataResponse,
    summary="Inspect a Table",
    responses={404: {"description": "Table not found"}}
)
def get_table_data(
    table_name: str,
    limit: int = Query(10, ge=1, le=1000),
    db: DatabaseService = Depends(get_db_service)
):
    try:
        rows = db.get_table_rows(table_name, limit=limit)
        count = db.count_rows(table_name)
    except NoSuchTableError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Table {table_name} not found.")
    except Exception as e:
        logger.exception(f"Error reading table {table_name}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e) or "Unknown error")

    return TableDataResponse(
        tableName=table_name,
        rows=rows,
        columns=list(rows[0].keys()) if rows else [],
        count=count,
    )


@router.get("/check-teachers", summary="Sample the Teachers Table")
def check_teachers(db: DatabaseService = Depends(get_db_service)):
    try:
        teachers = db.get_table_rows("Teachers", limit=CHECK_TEACHERS_SAMPLE_SIZE)
    except Exception as e:
        logger.exception("check-teachers query failed")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to query Teachers table", "details": str(e) or "Unknown error"},
        )
    return {
        "success": True,
        "teachers": teachers,
        "columnNames": list(teachers[0].keys()) if teachers else [],
    }
