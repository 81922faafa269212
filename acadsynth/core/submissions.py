"""
Submission simulation: whether and when a student submitted, and whether
marking has caught up with the current date.
"""

from datetime import date, timedelta
from typing import Optional

from acadsynth.core.calendar import AcademicCalendar
from acadsynth.core.models import Assessment, Submission, SubmissionStatus
from acadsynth.core.profile import StudentProfile
from acadsynth.shared.config import MarkingConfig, ProfileConfig, SimilarityConfig
from acadsynth.shared.logging import get_logger
from acadsynth.shared.random_source import RandomSource

logger = get_logger(__name__)

FEEDBACK_TEMPLATES = {
    "high": [
        "Excellent work! Clear understanding demonstrated throughout.",
        "Very well structured and thoroughly researched.",
        "Outstanding analysis with strong supporting evidence.",
    ],
    "medium": [
        "Good effort with some room for improvement.",
        "Demonstrates understanding but could expand analysis.",
        "Solid work overall, consider developing points further.",
    ],
    "low": [
        "Basic understanding shown but needs more depth.",
        "More analysis and critical thinking needed.",
        "Please review core concepts and develop arguments further.",
    ],
}

CONSISTENT_REMARK = " Maintains consistent quality across submissions."
VARIABLE_REMARK = " Shows variable quality compared to previous work."

# Share of the on-time probability that turns into an early hand-in
EARLY_SUBMISSION_FACTOR = 0.3
ON_TIME_MAX_DAYS_EARLY = 7
LATE_DAYS = (1, 5)
EARLY_MAX_DAYS_BEFORE_NOW = 5


class SubmissionGenerator:
    """Simulate one student's submission for one assessment."""

    def __init__(
        self,
        calendar: AcademicCalendar,
        rng: RandomSource,
        profile_config: ProfileConfig,
        marking: MarkingConfig,
        similarity: SimilarityConfig,
    ):
        self.calendar = calendar
        self.rng = rng
        self.profile_config = profile_config
        self.marking = marking
        self.similarity = similarity

    def generate(self, profile: StudentProfile, assessment: Assessment) -> Submission:
        """
        Generate the submission record for an assessment.

        Past assessments (due on or before the current date) resolve to
        submitted, late or missing. Future ones are pending unless the
        student already handed in early.
        """
        engagement = profile.engagement_at(
            self.calendar.progress_of(assessment.due_date),
            self.rng,
            jitter=self.profile_config.engagement_jitter,
        )

        if assessment.due_date <= self.calendar.current_date:
            submission = self._past_submission(assessment, profile, engagement)
        else:
            submission = self._future_submission(assessment, engagement)

        logger.debug(
            f"Generated {submission.status.value} submission",
            extra={"assessment": assessment.id, "graded": submission.is_graded},
        )
        return submission

    def _past_submission(
        self,
        assessment: Assessment,
        profile: StudentProfile,
        engagement: float
    ) -> Submission:
        pattern = profile.pattern_at(engagement, self.profile_config).normalized()
        draw = self.rng.random()

        if draw < pattern.on_time_prob:
            submitted_on = assessment.due_date - timedelta(
                days=self.rng.randint(0, ON_TIME_MAX_DAYS_EARLY)
            )
            submission = self._create(assessment, SubmissionStatus.SUBMITTED, submitted_on)
            return self._add_marking(submission, profile, is_late=False)

        if draw < pattern.on_time_prob + pattern.late_prob:
            submitted_on = assessment.due_date + timedelta(days=self.rng.randint(*LATE_DAYS))
            submission = self._create(assessment, SubmissionStatus.LATE, submitted_on)
            return self._add_marking(submission, profile, is_late=True)

        return self._create(assessment, SubmissionStatus.MISSING, None)

    def _future_submission(self, assessment: Assessment, engagement: float) -> Submission:
        early_chance = self.profile_config.base_on_time_prob * EARLY_SUBMISSION_FACTOR * engagement

        if self.rng.random() < early_chance:
            submitted_on = self.calendar.current_date - timedelta(
                days=self.rng.randint(0, EARLY_MAX_DAYS_BEFORE_NOW)
            )
            # Too recent to have been marked
            return self._create(assessment, SubmissionStatus.SUBMITTED, submitted_on)

        return self._create(assessment, SubmissionStatus.PENDING, None)

    def _create(
        self,
        assessment: Assessment,
        status: SubmissionStatus,
        submission_date: Optional[date]
    ) -> Submission:
        similarity = None
        if submission_date is not None:
            similarity = self.rng.randint(self.similarity.min, self.similarity.max)
        return Submission(
            assessment_id=assessment.id,
            status=status,
            submission_date=submission_date,
            similarity=similarity,
        )

    def marking_deadline(self, submission_date: date) -> date:
        return submission_date + timedelta(days=self.marking.deadline_days)

    def _add_marking(
        self,
        submission: Submission,
        profile: StudentProfile,
        is_late: bool
    ) -> Submission:
        """Simulate marking delay; grade only once the feedback date has passed."""
        submitted_on = submission.submission_date
        if submitted_on is None or submitted_on >= self.calendar.current_date:
            return submission

        feedback_date = self.sample_feedback_date(submitted_on)
        if feedback_date > self.calendar.current_date:
            return submission

        grade = self.sample_grade(profile, is_late)
        submission.grade = grade
        submission.feedback_date = feedback_date
        submission.feedback = self.generate_feedback(grade, profile.consistency)
        return submission

    def sample_feedback_date(self, submission_date: date) -> date:
        """Draw when marking happens, by marking-speed category."""
        deadline = self.marking_deadline(submission_date)
        category = self.rng.weighted_choice({
            "on_time": self.marking.on_time_prob,
            "late": self.marking.late_prob,
            "very_late": self.marking.very_late_prob,
        })

        if category == "on_time":
            return self.rng.random_date(submission_date + timedelta(days=1), deadline)
        if category == "late":
            return self.rng.random_date(
                deadline, deadline + timedelta(days=self.marking.late_window_days)
            )
        return self.rng.random_date(
            deadline + timedelta(days=self.marking.late_window_days),
            deadline + timedelta(days=self.marking.very_late_window_days),
        )

    def sample_grade(self, profile: StudentProfile, is_late: bool) -> int:
        low = profile.grade_range.min
        high = profile.grade_range.max
        if is_late:
            low = max(self.marking.late_grade_floor, low - self.marking.late_penalty)
        return self.rng.randint(min(low, high), high)

    def generate_feedback(self, grade: int, consistency: float) -> str:
        """Pick a feedback template by grade band, with a consistency remark for outliers."""
        if grade >= 70:
            templates = FEEDBACK_TEMPLATES["high"]
        elif grade >= 50:
            templates = FEEDBACK_TEMPLATES["medium"]
        else:
            templates = FEEDBACK_TEMPLATES["low"]

        remark = ""
        if consistency > 0.7:
            remark = CONSISTENT_REMARK
        elif consistency < 0.3:
            remark = VARIABLE_REMARK

        return self.rng.choice(templates) + remark
