# /app/services/database_helpers/fallback_data.py

"""
Built-in data served while the database is unreachable, so the schedule and
dashboard pages still render something meaningful in offline mode.
"""

import re
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

# Exact table names as they exist in the hosted database.
KNOWN_TABLES = [
    "Students-English",
    "Sprouts1-Course-Calendar",
    "Sprouts2-Course-Calendar",
    "Guardians3-Course-Calendar",
    "Clovers1A-Course-Calendar",
    "Clovers2A-Course-Calendar",
    "Teachers",
]

CALENDAR_TABLE_MARKER = "Course-Calendar"

_WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]
_CALENDAR_NAME_PATTERN = re.compile(r"^(\w+?)(\d\w*)?-Course-Calendar$")


def is_calendar_table(table_name: str) -> bool:
    return CALENDAR_TABLE_MARKER in table_name


def known_calendar_tables() -> List[str]:
    return [name for name in KNOWN_TABLES if is_calendar_table(name)]


def fallback_teachers() -> List[Dict[str, Any]]:
    return [
        {"Teacher_ID": 1, "Teacher_name": "John Smith", "Department": "English", "Teacher_Type": "Native"},
        {"Teacher_ID": 2, "Teacher_name": "Sarah Johnson", "Department": "English", "Teacher_Type": "Native"},
        {"Teacher_ID": 3, "Teacher_name": "Li Wei", "Department": "English", "Teacher_Type": "Local"},
        {"Teacher_ID": 4, "Teacher_name": "Wang Mei", "Department": "English", "Teacher_Type": "Local"},
        {"Teacher_ID": 5, "Teacher_name": "Robert Davis", "Department": "English", "Teacher_Type": "Native"},
    ]


def fallback_calendar(table_name: str, today: Optional[date] = None) -> List[Dict[str, Any]]:
    """
    Generates fifteen classes over three weeks starting on the Monday of the
    current week. Every third class is NT-Led.
    """
    match = _CALENDAR_NAME_PATTERN.match(table_name)
    level = (match.group(1) + (match.group(2) or "")) if match else "Unknown"

    today = today or date.today()
    monday = today - timedelta(days=today.weekday())

    entries = []
    for i in range(15):
        class_date = monday + timedelta(days=(i // 5) * 7 + (i % 5))
        is_afternoon = i % 2 == 1
        entries.append({
            "id": i + 1,
            "Visit": i // 5 + 1,
            "Date": class_date.isoformat(),
            "Course": level,
            "Level": level,
            "Day1": _WEEKDAYS[i % 5],
            "Start": "14:00" if is_afternoon else "09:00",
            "End": "16:00" if is_afternoon else "11:00",
            "Unit": f"Unit {i // 3 + 1}",
            "Class.ID": f"{level}-{i + 1:03d}",
            "NT-Led": i % 3 == 0,
        })
    return entries
