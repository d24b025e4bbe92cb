# /app/services/schedule_service.py

"""
Builds the weekly calendar view from the course calendar tables.

Calendar rows store their date as text imported from spreadsheets, so the
week filter goes through pandas' date parsing; rows whose date cannot be
parsed are dropped from the view.
"""

import logging
from datetime import date, timedelta
from typing import List, Optional

import pandas as pd

from ..models.schedule_model import CalendarEntry, DaySchedule, Teacher, WeeklySchedule
from .database_service import DatabaseService

logger = logging.getLogger(__name__)

WEEKDAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


def week_bounds(any_day: date) -> tuple:
    monday = any_day - timedelta(days=any_day.weekday())
    return monday, monday + timedelta(days=6)


def entry_involves_teacher(entry: CalendarEntry, teacher_name: str, teacher: Optional[Teacher]) -> bool:
    # Same attribution rule as the dashboard: NT-Led classes belong to every native teacher.
    if teacher_name in entry.assigned_teachers:
        return True
    return entry.is_nt_led and teacher is not None and teacher.is_native


def _entries_frame(entries: List[CalendarEntry]) -> pd.DataFrame:
    return pd.DataFrame({
        "position": range(len(entries)),
        "date": pd.to_datetime(pd.Series([e.Date for e in entries], dtype="object"), errors="coerce", format="mixed").dt.normalize(),
        # "9:00" and "14:00" compare as times, not strings.
        "start": pd.to_datetime(pd.Series([e.Start for e in entries], dtype="object"), errors="coerce", format="mixed"),
    })


def build_weekly_schedule(entries: List[CalendarEntry], week_start: date, tables: List[str],
                          teacher_name: Optional[str] = None,
                          teachers: Optional[List[Teacher]] = None) -> WeeklySchedule:
    monday, sunday = week_bounds(week_start)

    if teacher_name:
        teacher = next((t for t in teachers or [] if t.Teacher_name == teacher_name), None)
        entries = [e for e in entries if entry_involves_teacher(e, teacher_name, teacher)]

    df = _entries_frame(entries)
    in_week = df[(df["date"] >= pd.Timestamp(monday)) & (df["date"] <= pd.Timestamp(sunday))]
    in_week = in_week.sort_values(["date", "start", "position"])

    days = []
    for offset, weekday in enumerate(WEEKDAY_NAMES):
        day = monday + timedelta(days=offset)
        positions = in_week.loc[in_week["date"] == pd.Timestamp(day), "position"].tolist()
        days.append(DaySchedule(date=day.isoformat(), weekday=weekday,
                                entries=[entries[int(p)] for p in positions]))

    return WeeklySchedule(
        weekStart=monday.isoformat(),
        weekEnd=sunday.isoformat(),
        teacher=teacher_name,
        tables=tables,
        days=days,
        totalEntries=len(in_week),
    )


def get_weekly_schedule(db: DatabaseService, week_start: date, teacher_name: Optional[str] = None,
                        table_name: Optional[str] = None) -> WeeklySchedule:
    tables = [table_name] if table_name else db.get_calendar_tables()
    entries: List[CalendarEntry] = []
    for name in tables:
        entries.extend(db.get_calendar_entries(name))
    teachers = db.get_teachers() if teacher_name else None
    logger.info(f"Building schedule for week of {week_start} from {len(entries)} entries in {len(tables)} tables")
    return build_weekly_schedule(entries, week_start, tables, teacher_name=teacher_name, teachers=teachers)
