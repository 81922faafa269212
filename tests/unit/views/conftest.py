"""
Hand-built students for the role view tests.
"""

from datetime import date

import pytest

from acadsynth.core.models import (
    Assessment,
    AssessmentType,
    Module,
    Student,
    Submission,
    SubmissionStatus,
)


def make_assessment(assessment_id: str, due: date, **kwargs) -> Assessment:
    return Assessment(
        id=assessment_id,
        title=f"Algorithms {assessment_id}",
        type=AssessmentType.COURSEWORK,
        weight=30,
        submission_window=14,
        original_due_date=kwargs.pop("original_due_date", due),
        due_date=due,
        **kwargs,
    )


def make_submission(
    assessment_id: str, status: SubmissionStatus, submitted=None, grade=None, similarity=10
) -> Submission:
    return Submission(
        assessment_id=assessment_id,
        status=status,
        submission_date=submitted,
        grade=grade,
        similarity=similarity if submitted else None,
        feedback_date=date(2025, 2, 20) if grade is not None else None,
        feedback="Good effort with some room for improvement." if grade is not None else None,
    )


@pytest.fixture(name="make_assessment")
def make_assessment_fixture():
    return make_assessment


@pytest.fixture(name="make_submission")
def make_submission_fixture():
    return make_submission


@pytest.fixture
def make_student(profile):
    """Build a student holding one module from (assessment, submission) pairs."""

    def _make(student_id, pairs, program="Computer Science", code="ECM2410"):
        module = Module(
            code=code,
            name="Algorithms",
            term=2,
            assessments=[a for a, _ in pairs],
            submissions=[s for _, s in pairs],
        )
        return Student(
            id=student_id,
            name=f"Student {student_id}",
            year=2,
            program=program,
            profile=profile,
            modules=[module],
        )

    return _make
