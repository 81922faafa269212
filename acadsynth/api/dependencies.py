"""
FastAPI dependency injection for acadsynth services.
"""

from typing import List

from fastapi import HTTPException, Request

from acadsynth.core.calendar import AcademicCalendar
from acadsynth.core.models import Student
from acadsynth.shared.config import AcadSynthSettings
from acadsynth.shared.exceptions import StudentNotFoundError


def get_dataset(request: Request) -> List[Student]:
    """Get the generated dataset from lifespan state."""
    return request.app.state.dataset


def get_calendar(request: Request) -> AcademicCalendar:
    """Get the shared calendar from lifespan state."""
    return request.app.state.calendar


def get_app_settings(request: Request) -> AcadSynthSettings:
    """Get the settings the dataset was generated with."""
    return request.app.state.settings


def find_student(dataset: List[Student], student_id: str) -> Student:
    """Look up a student by id."""
    for student in dataset:
        if student.id == student_id:
            return student
    raise StudentNotFoundError(f"Unknown student: {student_id}")


def get_student(student_id: str, request: Request) -> Student:
    """Resolve the path's student id, translating a miss into 404."""
    try:
        return find_student(get_dataset(request), student_id)
    except StudentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
