# /tests/conftest.py

from typing import Any, Dict, List, Optional

import pytest

from app.models.schedule_model import CalendarEntry, Teacher
from app.services.database_helpers import fallback_data
from app.services.database_helpers.data_client import ConnectionStatus


class FakeDatabaseService:
    """
    A stand-in for DatabaseService that implements the DataClient contract
    plus the teacher/calendar reads, without any SQL.
    """

    def __init__(self, teachers=None, calendars=None, rows=None):
        self.status = ConnectionStatus.CONNECTED
        self.offline = False
        self.last_error: Optional[Exception] = None
        self.ping_result = True
        self.ping_error: Optional[Exception] = None
        self.rows_error: Optional[Exception] = None
        self.ping_calls = 0
        self.teachers: List[Teacher] = teachers or []
        self.calendars: Dict[str, List[CalendarEntry]] = calendars or {}
        self.rows: Dict[str, List[Dict[str, Any]]] = rows or {}

    # --- DataClient ---
    def get_table_rows(self, table_name, limit=None):
        if self.rows_error is not None:
            raise self.rows_error
        rows = self.rows.get(table_name, [])
        return rows[:limit] if limit is not None else rows

    def call_rpc(self, function_name, params=None):
        return []

    async def ping(self):
        self.ping_calls += 1
        if self.ping_error is not None:
            raise self.ping_error
        return self.ping_result

    def get_status(self):
        return self.status

    def get_last_error(self):
        return self.last_error

    def is_offline(self):
        return self.offline

    # --- Scheduler reads ---
    async def reconnect(self):
        self.offline = False
        return await self.ping()

    def count_rows(self, table_name):
        return len(self.rows.get(table_name, []))

    def list_tables(self):
        return list(self.rows) or list(fallback_data.KNOWN_TABLES), "schema"

    def get_teachers(self):
        return self.teachers

    def get_teacher_by_id(self, teacher_id):
        return next((t for t in self.teachers if t.Teacher_ID == teacher_id), None)

    def get_teachers_by_type(self, teacher_type):
        return [t for t in self.teachers if (t.Teacher_Type or "").lower() == teacher_type.lower()]

    def get_calendar_tables(self):
        return list(self.calendars)

    def get_calendar_entries(self, table_name):
        return self.calendars[table_name]

    def get_all_calendar_entries(self):
        return [entry for entries in self.calendars.values() for entry in entries]


@pytest.fixture
def teachers():
    """Two native teachers and one local teacher, in fetch order."""
    return [
        Teacher(Teacher_ID=1, Teacher_name="John Smith", Teacher_Type="Native"),
        Teacher(Teacher_ID=2, Teacher_name="Li Wei", Teacher_Type="Local"),
        Teacher(Teacher_ID=3, Teacher_name="Sarah Johnson", Teacher_Type="native"),
    ]


@pytest.fixture
def calendar_entries():
    return [
        CalendarEntry.model_validate({"id": 1, "Date": "2025-03-03", "Start": "14:00", "Day1": "Li Wei", "NT-Led": False}),
        CalendarEntry.model_validate({"id": 2, "Date": "2025-03-03", "Start": "09:00", "NT-Led": True}),
        CalendarEntry.model_validate({"id": 3, "Date": "2025-03-05", "Start": "09:00", "Day1": "Li Wei", "Day2": "John Smith", "NT-Led": "FALSE"}),
        CalendarEntry.model_validate({"id": 4, "Date": "2025-03-12", "Start": "09:00", "Day1": "Li Wei", "NT-Led": False}),
    ]


@pytest.fixture
def fake_db(teachers, calendar_entries):
    return FakeDatabaseService(
        teachers=teachers,
        calendars={"Clovers1A-Course-Calendar": calendar_entries},
        rows={"Teachers": [t.model_dump() for t in teachers]},
    )
