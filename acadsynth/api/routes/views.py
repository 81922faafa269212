"""
Role view endpoints (student, teacher, tutor).
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from acadsynth.api.dependencies import get_app_settings, get_calendar, get_dataset, get_student
from acadsynth.core.calendar import AcademicCalendar
from acadsynth.core.models import RiskLevel, Student
from acadsynth.shared.config import AcadSynthSettings
from acadsynth.views.student import build_student_overview
from acadsynth.views.teacher import build_marking_overview
from acadsynth.views.tutor import build_tutor_overview

router = APIRouter(prefix="/views", tags=["views"])


@router.get("/student/{student_id}")
async def student_view(
    student: Student = Depends(get_student),
    calendar: AcademicCalendar = Depends(get_calendar),
    app_settings: AcadSynthSettings = Depends(get_app_settings),
):
    return build_student_overview(student, calendar, app_settings.views)


@router.get("/teacher")
async def teacher_view(
    dataset: List[Student] = Depends(get_dataset),
    calendar: AcademicCalendar = Depends(get_calendar),
    app_settings: AcadSynthSettings = Depends(get_app_settings),
):
    return build_marking_overview(
        dataset, calendar, app_settings.marking, app_settings.similarity, app_settings.views
    )


@router.get("/tutor")
async def tutor_view(
    program: Optional[str] = Query(default=None),
    risk: Optional[RiskLevel] = Query(default=None),
    dataset: List[Student] = Depends(get_dataset),
    calendar: AcademicCalendar = Depends(get_calendar),
    app_settings: AcadSynthSettings = Depends(get_app_settings),
):
    """Tutee overview, filterable by programme and risk tier."""
    return build_tutor_overview(
        dataset, calendar, app_settings.views, program=program, risk=risk
    )
