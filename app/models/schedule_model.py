# /app/models/schedule_model.py

from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Teacher(BaseModel):
    """
    A row of the `Teachers` table. Column names are kept exactly as they are
    in the database; unknown columns are preserved.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    Teacher_ID: Optional[int] = None
    Teacher_name: str
    Department: Optional[str] = None
    Teacher_Type: Optional[str] = None

    @property
    def is_native(self) -> bool:
        return (self.Teacher_Type or "").lower() == "native"


class CalendarEntry(BaseModel):
    """
    A row of one of the `*-Course-Calendar` tables.

    `NT-Led` arrives either as a real boolean or as a string such as "TRUE",
    depending on how the sheet was imported.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: Optional[int] = None
    Visit: Optional[int] = None
    Date: Optional[str] = None
    Course: Optional[str] = None
    Level: Optional[str] = None
    Day1: Optional[str] = None
    Day2: Optional[str] = None
    Start: Optional[str] = None
    End: Optional[str] = None
    Unit: Optional[str] = None
    Meeting: Optional[str] = None
    class_id: Optional[str] = Field(default=None, alias="Class.ID")
    nt_led: Optional[Union[bool, str]] = Field(default=None, alias="NT-Led")

    @property
    def is_nt_led(self) -> bool:
        return self.nt_led is True or str(self.nt_led).lower() == "true"

    @property
    def assigned_teachers(self) -> List[str]:
        return [name for name in (self.Day1, self.Day2) if name]


class DaySchedule(BaseModel):
    date: str
    weekday: str
    entries: List[CalendarEntry]


class WeeklySchedule(BaseModel):
    """The response contract for GET /api/schedule."""
    weekStart: str
    weekEnd: str
    teacher: Optional[str] = None
    tables: List[str]
    days: List[DaySchedule]
    totalEntries: int


class TableListResponse(BaseModel):
    tables: List[str]
    source: str = Field(..., description="Where the list came from: 'rpc', 'schema' or 'fallback'.")


class TableDataResponse(BaseModel):
    tableName: str
    rows: List[Dict]
    columns: List[str]
    count: int
