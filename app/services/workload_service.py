# /app/services/workload_service.py

# --- Core Imports ---
from typing import Dict, List

from ..models.dashboard_model import WorkloadSummary
from ..models.schedule_model import CalendarEntry, Teacher
from .database_service import DatabaseService

# --- Core Public Functions ---

def aggregate_workload(teachers: List[Teacher], entries: List[CalendarEntry]) -> WorkloadSummary:
    """
    Folds calendar entries into per-teacher class counts and the NT-Led split
    shown on the statistical dashboard.

    NT-Led classes are credited to every Native teacher, not just the one who
    taught the class: the calendar does not record which native teacher led
    it. Non-NT-Led classes are credited to the teachers named in Day1/Day2
    when those names match a known teacher; anything else is ignored.

    Args:
        teachers: Teacher records, in the order they should be charted.
        entries: Calendar entries from every calendar table.

    Returns:
        A WorkloadSummary ready for the bar and doughnut charts.
    """
    teacher_workload: Dict[str, int] = {teacher.Teacher_name: 0 for teacher in teachers}
    native_teachers = [teacher.Teacher_name for teacher in teachers if teacher.is_native]
    nt_led_count = 0
    non_nt_led_count = 0

    for entry in entries:
        if entry.is_nt_led:
            nt_led_count += 1
            for name in native_teachers:
                teacher_workload[name] += 1
        else:
            non_nt_led_count += 1
            for name in entry.assigned_teachers:
                if name in teacher_workload:
                    teacher_workload[name] += 1

    return WorkloadSummary(
        teacherWorkload=teacher_workload,
        ntLedCount=nt_led_count,
        nonNtLedCount=non_nt_led_count,
        classTypeData=[non_nt_led_count, nt_led_count],
        totalTeachers=len(teachers),
        totalScheduledClasses=len(entries),
    )


def get_dashboard_workload(db: DatabaseService) -> WorkloadSummary:
    """Fetches teachers and every calendar table, then aggregates them."""
    teachers = db.get_teachers()
    entries = db.get_all_calendar_entries()
    return aggregate_workload(teachers, entries)
