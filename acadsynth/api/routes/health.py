"""
Health check endpoint.
"""

import time
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from acadsynth.api.dependencies import get_calendar, get_dataset
from acadsynth.core.calendar import AcademicCalendar
from acadsynth.core.models import Student

router = APIRouter(tags=["health"])

# Track startup time for uptime
_start_time: Optional[float] = None


def set_start_time(t: float):
    """Set application start time."""
    global _start_time
    _start_time = t


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    students: int
    current_date: str
    uptime_seconds: float


@router.get("/health", response_model=HealthResponse)
async def health_check(
    dataset: List[Student] = Depends(get_dataset),
    calendar: AcademicCalendar = Depends(get_calendar),
):
    """
    Service health check.
    Returns status, dataset size, synthetic current date and uptime.
    """
    uptime_seconds = 0.0
    if _start_time:
        uptime_seconds = round(time.time() - _start_time, 2)

    return HealthResponse(
        status="healthy" if dataset else "empty",
        students=len(dataset),
        current_date=calendar.current_date.isoformat(),
        uptime_seconds=uptime_seconds,
    )
