"""
Student dashboard data: one student's assessments bucketed by urgency.
"""

from typing import Any, Dict, List

from acadsynth.core.calendar import AcademicCalendar
from acadsynth.core.models import Student
from acadsynth.shared.config import ViewsConfig


def build_student_overview(
    student: Student,
    calendar: AcademicCalendar,
    config: ViewsConfig
) -> Dict[str, Any]:
    """
    Join each assessment with its submission and bucket them.

    Buckets:
        overdue: past due, nothing handed in, still inside the late window
        upcoming: not yet due, soonest first
        past: everything else that is past due, most recent first
    """
    window = config.late_submission_window_days
    rows: List[Dict[str, Any]] = []

    for module in student.modules:
        for assessment, submission in module.pairs():
            days_until = calendar.days_from_now(assessment.due_date)
            handed_in = submission is not None and submission.is_handed_in
            is_past = days_until < 0
            submittable = -days_until <= window
            rows.append({
                "module_code": module.code,
                "module_name": module.name,
                "assessment": assessment.model_dump(mode="json"),
                "submission": submission.model_dump(mode="json") if submission else None,
                "days_until": days_until,
                "is_past": is_past,
                "is_overdue": is_past and submittable and not handed_in,
                "is_submittable": submittable,
            })

    overdue = sorted(
        (r for r in rows if r["is_overdue"]),
        key=lambda r: r["days_until"], reverse=True,
    )
    upcoming = sorted(
        (r for r in rows if not r["is_past"]),
        key=lambda r: r["days_until"],
    )
    past = sorted(
        (r for r in rows if r["is_past"] and not r["is_overdue"]),
        key=lambda r: r["assessment"]["due_date"], reverse=True,
    )

    completed = sum(
        1 for module in student.modules for s in module.submissions if s.is_handed_in
    )
    total = len(rows)

    return {
        "student": {
            "id": student.id,
            "name": student.name,
            "program": student.program,
            "year": student.year,
        },
        "current_date": calendar.current_date.isoformat(),
        "overdue": overdue,
        "upcoming": upcoming,
        "past": past,
        "completed": completed,
        "total": total,
        "progress_percentage": round(completed / total * 100) if total else 0,
    }
