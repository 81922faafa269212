"""
Assessment generation: due-date placement across a term and extension assignment.
"""

import math
from datetime import date, timedelta
from typing import List, Optional, Tuple

from acadsynth.core.calendar import AcademicCalendar
from acadsynth.core.models import Assessment, AssessmentType
from acadsynth.core.profile import StudentProfile
from acadsynth.shared.config import AssessmentConfig, CatalogConfig
from acadsynth.shared.logging import get_logger
from acadsynth.shared.random_source import RandomSource

logger = get_logger(__name__)

EXTENSION_REASONS = [
    "Technical difficulties",
    "Personal circumstances",
    "Illness",
    "Family emergency",
    "Work commitments",
    "Other coursework conflicts",
    "Bereavement",
    "Computer failure",
    "Internet connectivity issues",
]


class AssessmentGenerator:
    """Generate the assessments of one module for one student."""

    def __init__(
        self,
        calendar: AcademicCalendar,
        rng: RandomSource,
        config: AssessmentConfig,
        catalog: CatalogConfig,
    ):
        self.calendar = calendar
        self.rng = rng
        self.config = config
        self.catalog = catalog

    def generate(
        self,
        module_code: str,
        term: int,
        profile: Optional[StudentProfile] = None
    ) -> List[Assessment]:
        """
        Generate assessments for a module.

        Args:
            module_code: Catalog code of the module
            term: Term the module is taught in (1 or 2)
            profile: Student profile; when given, extensions are applied

        Returns:
            Assessments ordered by effective due date
        """
        count = self.rng.randint(self.config.count.min, self.config.count.max)
        positions = self.term_positions(term, count)
        module_name = self.catalog.modules.get(module_code, module_code)

        assessments = []
        for i, position in enumerate(positions):
            due_date, placement_valid = self.place_due_date(term, position)
            assessments.append(Assessment(
                id=f"{module_code}_A{i + 1}",
                title=f"{module_name} Assessment {i + 1}",
                type=self._pick_type(),
                weight=self.rng.randint(self.config.weight.min, self.config.weight.max),
                submission_window=self.rng.randint(
                    self.config.submission_window_days.min,
                    self.config.submission_window_days.max,
                ),
                original_due_date=due_date,
                due_date=due_date,
                is_past=self.calendar.is_past(due_date),
                days_from_now=self.calendar.days_from_now(due_date),
                term_position=round(position, 4),
                placement_valid=placement_valid,
            ))

        if profile is not None:
            self.apply_extensions(assessments)

        logger.debug(
            f"Generated {count} assessments for {module_code}",
            extra={
                "term": term,
                "due_dates": [a.due_date.isoformat() for a in assessments],
                "extensions": sum(1 for a in assessments if a.has_extension),
            },
        )

        return sorted(assessments, key=lambda a: a.due_date)

    def _pick_type(self) -> AssessmentType:
        if self.rng.chance(self.config.coursework_prob):
            return AssessmentType.COURSEWORK
        if self.rng.chance(self.config.project_prob):
            return AssessmentType.PROJECT
        return AssessmentType.QUIZ

    def term_positions(self, term: int, count: int) -> List[float]:
        """
        Relative positions (0-1) of each assessment within the term.

        In the term holding the current date, the first assessment lands early,
        the last lands at or after current progress, and any middle ones
        cluster around current progress. Other terms are evenly spaced.
        """
        if count <= 0:
            return []
        if term != self.calendar.current_term:
            return [(i + 1) / (count + 1) for i in range(count)]

        progress = self.calendar.get_term_progress(term)
        window = self.config.progress_window

        if count == 1:
            low = max(0.0, progress - window)
            high = min(1.0, progress + window)
            return [self.rng.uniform(low, high)]

        # Far into the term, pull the first assessment further forward
        first_high = 0.25 if progress < 0.5 else 0.15
        first = self.rng.uniform(0.05, first_high)
        last = self.rng.uniform(min(progress + 0.05, 0.9), 0.95)

        low_bound, high_bound = min(first, last), max(first, last)
        middle = []
        for _ in range(count - 2):
            low = min(max(progress - window, low_bound), high_bound)
            high = max(min(progress + window, high_bound), low)
            middle.append(self.rng.uniform(low, high))

        return sorted([first, *middle, last])

    def place_due_date(self, term: int, position: float) -> Tuple[date, bool]:
        """
        Convert a term position into a due date that avoids holiday breaks.

        Invalid dates are pushed forward in fixed steps up to the configured
        number of attempts. When every attempt fails the last date is kept and
        reported as not valid.
        """
        dates = self.calendar.get_term_dates(term)
        length = (dates.end - dates.start).days
        due_date = dates.start + timedelta(days=round(position * length))

        attempts = 0
        while not self.calendar.is_valid_assessment_date(due_date):
            if attempts >= self.config.placement_max_attempts:
                logger.warning(
                    "Could not move assessment out of break period",
                    extra={"term": term, "due_date": due_date.isoformat(), "attempts": attempts},
                )
                return due_date, False
            due_date += timedelta(days=self.config.placement_step_days)
            attempts += 1

        return due_date, True

    def apply_extensions(self, assessments: List[Assessment]) -> int:
        """
        Grant extensions to a share of the module's assessments.

        Only assessments due within the eligibility window of the current date
        qualify, closest first. Returns the number of extensions granted.
        """
        to_extend = math.floor(len(assessments) * self.config.extension_rate)
        if to_extend == 0:
            return 0

        window = self.config.extension_window_days
        candidates = sorted(
            (a for a in assessments if abs(a.days_from_now) <= window),
            key=lambda a: abs(a.days_from_now),
        )

        granted = 0
        for assessment in candidates[:to_extend]:
            days = (
                self.config.short_extension_days
                if self.rng.chance(self.config.short_extension_prob)
                else self.config.long_extension_days
            )
            assessment.has_extension = True
            assessment.extension_days = days
            assessment.extension_reason = self.rng.choice(EXTENSION_REASONS)
            assessment.due_date = assessment.original_due_date + timedelta(days=days)

            # Derived metadata follows the effective due date
            assessment.days_from_now = self.calendar.days_from_now(assessment.due_date)
            assessment.is_past = self.calendar.is_past(assessment.due_date)
            granted += 1

            logger.debug(
                f"Applied {days}-day extension",
                extra={
                    "assessment": assessment.id,
                    "original_due": assessment.original_due_date.isoformat(),
                    "new_due": assessment.due_date.isoformat(),
                    "reason": assessment.extension_reason,
                },
            )

        return granted
