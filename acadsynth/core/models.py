"""
Pydantic models for the generated dataset.
"""

from datetime import date
from enum import Enum
from typing import Optional, List, Dict

from pydantic import BaseModel, Field

from acadsynth.core.profile import StudentProfile


class AssessmentType(str, Enum):
    COURSEWORK = "Coursework"
    PROJECT = "Project"
    QUIZ = "Quiz"


class SubmissionStatus(str, Enum):
    SUBMITTED = "submitted"
    LATE = "late"
    MISSING = "missing"
    PENDING = "pending"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TermDates(BaseModel):
    """Start and end of one term."""
    start: date
    end: date


class Assessment(BaseModel):
    """A single assessment within a module."""
    id: str
    title: str
    type: AssessmentType
    weight: int
    submission_window: int
    original_due_date: date
    due_date: date
    has_extension: bool = False
    extension_days: int = 0
    extension_reason: Optional[str] = None
    is_past: bool = False
    days_from_now: int = 0
    term_position: float = 0.0
    placement_valid: bool = True


class Submission(BaseModel):
    """One student's outcome for one assessment."""
    assessment_id: str
    status: SubmissionStatus
    submission_date: Optional[date] = None
    grade: Optional[int] = None
    similarity: Optional[int] = None
    feedback_date: Optional[date] = None
    feedback: Optional[str] = None

    @property
    def is_handed_in(self) -> bool:
        return self.status in (SubmissionStatus.SUBMITTED, SubmissionStatus.LATE)

    @property
    def is_graded(self) -> bool:
        return self.grade is not None


class Module(BaseModel):
    """A module taken by a student in one term."""
    code: str
    name: str
    term: int = Field(ge=1, le=2)
    assessments: List[Assessment] = Field(default_factory=list)
    submissions: List[Submission] = Field(default_factory=list)

    def submission_for(self, assessment_id: str) -> Optional[Submission]:
        """Look up the submission belonging to an assessment by id."""
        for submission in self.submissions:
            if submission.assessment_id == assessment_id:
                return submission
        return None

    def pairs(self) -> List[tuple]:
        """(assessment, submission) pairs joined by assessment id."""
        return [(a, self.submission_for(a.id)) for a in self.assessments]


class Student(BaseModel):
    """A synthetic student and everything generated for them."""
    id: str
    name: str
    year: int
    program: str
    profile: StudentProfile
    modules: List[Module] = Field(default_factory=list)

    def all_submissions(self) -> List[Submission]:
        return [s for module in self.modules for s in module.submissions]


class DatasetAnalysis(BaseModel):
    """Aggregate statistics over a generated dataset."""
    total_students: int
    submission_stats: Dict[str, int] = Field(default_factory=dict)
    grade_distribution: Dict[int, int] = Field(default_factory=dict)
    program_distribution: Dict[str, int] = Field(default_factory=dict)
    risk_analysis: Dict[str, int] = Field(default_factory=lambda: {
        RiskLevel.HIGH.value: 0,
        RiskLevel.MEDIUM.value: 0,
        RiskLevel.LOW.value: 0,
    })
