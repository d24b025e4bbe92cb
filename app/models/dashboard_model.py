# /app/models/dashboard_model.py

# --- Core Imports ---
from typing import Dict, List

from pydantic import BaseModel, Field

# --- Model Definition ---

class WorkloadSummary(BaseModel):
    """
    Defines the data contract for the statistical dashboard. The shape maps
    directly onto the two charts on the page: a bar chart of classes per
    teacher and a doughnut of NT-Led versus non-NT-Led classes.
    """

    teacherWorkload: Dict[str, int] = Field(
        ...,
        description="Classes attributed to each teacher, in teacher fetch order.",
        examples=[{"John Smith": 12, "Li Wei": 7}]
    )

    ntLedCount: int = Field(..., description="Number of NT-Led classes.", examples=[5])

    nonNtLedCount: int = Field(..., description="Number of classes that are not NT-Led.", examples=[10])

    classTypeData: List[int] = Field(
        ...,
        description="Doughnut chart data, ordered [non-NT-Led, NT-Led].",
        examples=[[10, 5]]
    )

    totalTeachers: int = Field(..., examples=[5])

    totalScheduledClasses: int = Field(..., examples=[15])
