"""
Teacher dashboard data: marking workload across past assessments.
"""

from datetime import timedelta
from typing import Any, Dict, List

from acadsynth.core.calendar import AcademicCalendar
from acadsynth.core.models import Student
from acadsynth.shared.config import MarkingConfig, SimilarityConfig, ViewsConfig


def collect_marking_queue(
    dataset: List[Student],
    calendar: AcademicCalendar,
    marking: MarkingConfig,
    similarity: SimilarityConfig
) -> Dict[str, List[Dict[str, Any]]]:
    """
    Aggregate past assessments across students.

    Only real hand-ins (submitted or late with a date) count towards the
    totals, and those at or above the similarity threshold are flagged.
    Returns incomplete assessments ordered by marking deadline and completed
    ones ordered most recent first.
    """
    by_key: Dict[str, Dict[str, Any]] = {}

    for student in dataset:
        for module in student.modules:
            for assessment, submission in module.pairs():
                if assessment.due_date > calendar.current_date:
                    continue

                key = f"{module.code}_{assessment.id}"
                entry = by_key.get(key)
                if entry is None:
                    entry = {
                        "id": assessment.id,
                        "module_code": module.code,
                        "module_name": module.name,
                        "title": assessment.title,
                        "due_date": assessment.due_date,
                        "total_submissions": 0,
                        "marked_submissions": 0,
                        "high_similarity": 0,
                        "submissions": [],
                    }
                    by_key[key] = entry
                else:
                    entry["due_date"] = min(entry["due_date"], assessment.due_date)

                if submission is None or not submission.is_handed_in or submission.submission_date is None:
                    continue

                entry["total_submissions"] += 1
                if submission.is_graded:
                    entry["marked_submissions"] += 1
                flagged = (
                    submission.similarity is not None
                    and submission.similarity >= similarity.high_threshold
                )
                if flagged:
                    entry["high_similarity"] += 1
                entry["submissions"].append({
                    "student_id": student.id,
                    "student_name": student.name,
                    "submission_date": submission.submission_date,
                    "grade": submission.grade,
                    "feedback": submission.feedback,
                    "similarity": submission.similarity,
                    "high_similarity": flagged,
                })

    entries = list(by_key.values())
    for entry in entries:
        entry["marking_deadline"] = entry["due_date"] + timedelta(days=marking.deadline_days)

    incomplete = sorted(
        (e for e in entries if e["marked_submissions"] < e["total_submissions"]),
        key=lambda e: e["marking_deadline"],
    )
    completed = sorted(
        (e for e in entries if e["total_submissions"] > 0 and e["marked_submissions"] == e["total_submissions"]),
        key=lambda e: e["due_date"], reverse=True,
    )
    return {"incomplete": incomplete, "completed": completed}


def build_marking_overview(
    dataset: List[Student],
    calendar: AcademicCalendar,
    marking: MarkingConfig,
    similarity: SimilarityConfig,
    config: ViewsConfig
) -> Dict[str, Any]:
    """Marking queue plus headline counts."""
    queue = collect_marking_queue(dataset, calendar, marking, similarity)
    warning_date = calendar.current_date + timedelta(days=config.marking_warning_days)

    to_mark = 0
    approaching = 0
    for entry in queue["incomplete"]:
        unmarked = entry["total_submissions"] - entry["marked_submissions"]
        to_mark += unmarked
        if entry["marking_deadline"] <= warning_date:
            approaching += unmarked

    return {
        "current_date": calendar.current_date,
        "stats": {
            "to_mark": to_mark,
            "completed": sum(e["marked_submissions"] for e in queue["completed"]),
            "approaching_deadline": approaching,
            "incomplete_assessments": len(queue["incomplete"]),
            "high_similarity": sum(
                e["high_similarity"] for e in queue["incomplete"] + queue["completed"]
            ),
        },
        "incomplete": queue["incomplete"],
        "completed": queue["completed"],
    }
