"""
Personal tutor dashboard data: tutee standing and upcoming deadlines.
"""

from typing import Any, Dict, List, Optional

from acadsynth.core.calendar import AcademicCalendar
from acadsynth.core.models import RiskLevel, Student
from acadsynth.core.risk import StudentStats
from acadsynth.shared.config import ViewsConfig


def days_since_last_submission(student: Student, calendar: AcademicCalendar) -> Optional[int]:
    dates = [s.submission_date for s in student.all_submissions() if s.submission_date is not None]
    if not dates:
        return None
    return (calendar.current_date - max(dates)).days


def upcoming_deadlines(
    dataset: List[Student],
    calendar: AcademicCalendar,
    limit: int
) -> List[Dict[str, Any]]:
    """Soonest future deadlines across all tutees with the share already handed in."""
    deadlines: Dict[str, Dict[str, Any]] = {}

    for student in dataset:
        for module in student.modules:
            for assessment, submission in module.pairs():
                if assessment.due_date <= calendar.current_date:
                    continue
                key = f"{module.code}_{assessment.id}"
                entry = deadlines.setdefault(key, {
                    "module_code": module.code,
                    "title": assessment.title,
                    "due_date": assessment.due_date,
                    "not_submitted": 0,
                    "total_students": 0,
                })
                # Each student's copy has its own due date; show the earliest
                entry["due_date"] = min(entry["due_date"], assessment.due_date)
                entry["total_students"] += 1
                if submission is None or submission.submission_date is None:
                    entry["not_submitted"] += 1

    rows = sorted(deadlines.values(), key=lambda d: d["due_date"])[:limit]
    for row in rows:
        handed_in = row["total_students"] - row["not_submitted"]
        row["submission_rate"] = round(handed_in / row["total_students"] * 100)
    return rows


def build_tutor_overview(
    dataset: List[Student],
    calendar: AcademicCalendar,
    config: ViewsConfig,
    program: Optional[str] = None,
    risk: Optional[RiskLevel] = None,
) -> Dict[str, Any]:
    """
    Summary counts, filtered student rows and upcoming deadlines.

    Args:
        dataset: All tutees
        calendar: Shared calendar ("now" is its current date)
        config: View settings
        program: Only list students on this programme
        risk: Only list students in this risk tier
    """
    rows = []
    counts = {level.value: 0 for level in RiskLevel}

    for student in dataset:
        stats = StudentStats.from_student(student)
        level = stats.risk
        counts[level.value] += 1

        if program is not None and student.program != program:
            continue
        if risk is not None and level != risk:
            continue

        rows.append({
            "id": student.id,
            "name": student.name,
            "program": student.program,
            "stats": stats.to_dict(),
            "risk": level.value,
            "days_since_last_submission": days_since_last_submission(student, calendar),
        })

    return {
        "current_date": calendar.current_date,
        "total_tutees": len(dataset),
        "program_count": len({s.program for s in dataset}),
        "risk_counts": counts,
        "students": rows,
        "upcoming_deadlines": upcoming_deadlines(dataset, calendar, config.upcoming_deadlines_limit),
    }
