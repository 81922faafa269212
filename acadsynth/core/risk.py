"""
Student risk policy shared by dataset analytics and the role views.
"""

from dataclasses import dataclass
from typing import Optional, Iterable

from acadsynth.core.models import RiskLevel, Student, Submission, SubmissionStatus

HIGH_MISSING_RATE = 0.3
HIGH_GRADE_FLOOR = 40
MEDIUM_MISSING_RATE = 0.1
MEDIUM_LATE_RATE = 0.3
MEDIUM_GRADE_FLOOR = 55


def classify_risk(
    missing_rate: float,
    late_rate: float,
    average_grade: Optional[float]
) -> RiskLevel:
    """
    Three-tier risk classification.

    All comparisons are strict: a missing rate of exactly 0.3 is not high
    risk, an average of exactly 40 is not high risk, and an average of
    exactly 55 is low risk. A student with no graded work is judged on
    rates alone.
    """
    if missing_rate > HIGH_MISSING_RATE:
        return RiskLevel.HIGH
    if average_grade is not None and average_grade < HIGH_GRADE_FLOOR:
        return RiskLevel.HIGH
    if missing_rate > MEDIUM_MISSING_RATE or late_rate > MEDIUM_LATE_RATE:
        return RiskLevel.MEDIUM
    if average_grade is not None and average_grade < MEDIUM_GRADE_FLOOR:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


@dataclass
class StudentStats:
    """Submission counts and rates for one student."""
    total: int = 0
    submitted: int = 0
    late: int = 0
    missing: int = 0
    pending: int = 0
    graded: int = 0
    average_grade: Optional[float] = None

    @classmethod
    def from_submissions(cls, submissions: Iterable[Submission]) -> "StudentStats":
        stats = cls()
        grade_total = 0
        for submission in submissions:
            stats.total += 1
            if submission.status == SubmissionStatus.SUBMITTED:
                stats.submitted += 1
            elif submission.status == SubmissionStatus.LATE:
                stats.late += 1
            elif submission.status == SubmissionStatus.MISSING:
                stats.missing += 1
            else:
                stats.pending += 1
            if submission.grade is not None:
                stats.graded += 1
                grade_total += submission.grade
        if stats.graded:
            stats.average_grade = grade_total / stats.graded
        return stats

    @classmethod
    def from_student(cls, student: Student) -> "StudentStats":
        return cls.from_submissions(student.all_submissions())

    @property
    def missing_rate(self) -> float:
        return self.missing / self.total if self.total else 0.0

    @property
    def late_rate(self) -> float:
        return self.late / self.total if self.total else 0.0

    @property
    def risk(self) -> RiskLevel:
        return classify_risk(self.missing_rate, self.late_rate, self.average_grade)

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "submitted": self.submitted,
            "late": self.late,
            "missing": self.missing,
            "pending": self.pending,
            "graded": self.graded,
            "average_grade": round(self.average_grade) if self.average_grade is not None else None,
            "missing_rate": round(self.missing_rate, 4),
            "late_rate": round(self.late_rate, 4),
        }


def student_risk(student: Student) -> RiskLevel:
    """Risk tier for a generated student."""
    return StudentStats.from_student(student).risk
