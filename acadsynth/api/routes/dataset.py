"""
Dataset endpoints: calendar, students and aggregate analysis.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from acadsynth.api.dependencies import get_calendar, get_dataset, get_student
from acadsynth.core.calendar import AcademicCalendar
from acadsynth.core.dataset import analyze_dataset
from acadsynth.core.models import DatasetAnalysis, Student

router = APIRouter(tags=["dataset"])


@router.get("/calendar")
async def calendar_state(calendar: AcademicCalendar = Depends(get_calendar)):
    return calendar.to_dict()


@router.get("/students")
async def list_students(
    program: Optional[str] = Query(default=None),
    dataset: List[Student] = Depends(get_dataset),
):
    """Student summaries, optionally for one programme."""
    return [
        {"id": s.id, "name": s.name, "program": s.program, "year": s.year}
        for s in dataset
        if program is None or s.program == program
    ]


@router.get("/students/{student_id}", response_model=Student)
async def student_detail(student: Student = Depends(get_student)):
    return student


@router.get("/analysis", response_model=DatasetAnalysis)
async def analysis(dataset: List[Student] = Depends(get_dataset)):
    return analyze_dataset(dataset)
