"""
Academic calendar: term boundaries and the synthetic "current date".
"""

from datetime import date, timedelta
from typing import Optional

from acadsynth.core.models import TermDates
from acadsynth.shared.config import BreakWindow, CalendarConfig
from acadsynth.shared.exceptions import ConfigurationError
from acadsynth.shared.logging import get_logger

logger = get_logger(__name__)


def in_break(d: date, window: BreakWindow, inclusive: Optional[bool] = None) -> bool:
    """
    True when the date falls inside the break window.

    `inclusive` overrides the window's own setting for its first and last day.
    """
    if d.month != window.month:
        return False
    if window.inclusive if inclusive is None else inclusive:
        return window.start_day <= d.day <= window.end_day
    return window.start_day < d.day < window.end_day


class AcademicCalendar:
    """
    Two-term academic year positioned around a synthetic "now".

    The wall clock only selects which academic year is generated. The current
    date itself sits at a fixed fraction of the year so that generated data
    always contains a mix of past and future assessments. One instance is
    shared read-only by every generator in a run.
    """

    def __init__(self, config: CalendarConfig, today: Optional[date] = None):
        self.config = config
        self.today = today or date.today()
        self._calculate()

    def _make_date(self, year: int, month: int, day: int) -> date:
        try:
            return date(year, month, day)
        except ValueError as e:
            raise ConfigurationError(f"Invalid calendar date {year}-{month:02d}-{day:02d}: {e}") from e

    def _calculate(self):
        """Compute term boundaries and position the current date."""
        cfg = self.config

        self.academic_year = self.today.year
        if self.today.month < cfg.term1_start_month:
            self.academic_year -= 1

        self.term1_start = self._make_date(self.academic_year, cfg.term1_start_month, cfg.term1_start_day)
        self.term1_end = self._make_date(self.academic_year, cfg.term1_end_month, cfg.term1_end_day)
        self.term2_start = self._make_date(self.academic_year + 1, cfg.term2_start_month, cfg.term2_start_day)
        self.term2_end = self._make_date(self.academic_year + 1, cfg.term2_end_month, cfg.term2_end_day)

        if not (self.term1_start < self.term1_end < self.term2_start < self.term2_end):
            raise ConfigurationError(
                "Terms must be ordered term1_start < term1_end < term2_start < term2_end, got "
                f"{self.term1_start}, {self.term1_end}, {self.term2_start}, {self.term2_end}"
            )

        self.current_date = self._position_current_date()

        logger.debug(
            "Term dates calculated",
            extra={
                "academic_year": self.academic_year,
                "term1_start": self.term1_start.isoformat(),
                "term1_end": self.term1_end.isoformat(),
                "term2_start": self.term2_start.isoformat(),
                "term2_end": self.term2_end.isoformat(),
                "current_date": self.current_date.isoformat(),
            },
        )

    def _position_current_date(self) -> date:
        cfg = self.config
        span_days = (self.term2_end - self.term1_start).days
        current = self.term1_start + timedelta(days=round(cfg.target_fraction * span_days))

        # Winter gap between terms
        if self.term1_end < current < self.term2_start:
            term2_days = (self.term2_end - self.term2_start).days
            current = self.term2_start + timedelta(days=round(cfg.winter_gap_fraction * term2_days))

        for window in cfg.breaks:
            if in_break(current, window, inclusive=True):
                break_end = self._make_date(current.year, window.month, window.end_day)
                current = break_end + timedelta(days=cfg.break_resume_days)

        if self.term_for(current) is None or self._break_containing(current, inclusive=True) is not None:
            raise ConfigurationError(
                f"Current date {current} falls outside the teaching terms or inside a break; "
                "check target_fraction and break windows"
            )
        return current

    def _break_containing(self, d: date, inclusive: Optional[bool] = None) -> Optional[BreakWindow]:
        for window in self.config.breaks:
            if in_break(d, window, inclusive):
                return window
        return None

    def is_valid_assessment_date(self, d: date) -> bool:
        """Assessments may not fall due during a holiday break."""
        return self._break_containing(d) is None

    def get_term_dates(self, term: int) -> TermDates:
        """Return start/end dates of term 1 or 2."""
        if term == 1:
            return TermDates(start=self.term1_start, end=self.term1_end)
        if term == 2:
            return TermDates(start=self.term2_start, end=self.term2_end)
        raise ValueError(f"Unknown term: {term}")

    def term_for(self, d: date) -> Optional[int]:
        """Term containing the date, or None outside both terms."""
        if self.term1_start <= d <= self.term1_end:
            return 1
        if self.term2_start <= d <= self.term2_end:
            return 2
        return None

    @property
    def current_term(self) -> int:
        return self.term_for(self.current_date)

    def get_term_progress(self, term: Optional[int] = None) -> float:
        """Elapsed fraction of a term at the current date, clamped to [0, 1]."""
        dates = self.get_term_dates(term or self.current_term)
        return self._fraction(self.current_date, dates)

    def progress_of(self, d: date) -> float:
        """
        Position of an arbitrary date within its term, clamped to [0, 1].

        Dates up to the end of term 1 are measured against term 1, everything
        later against term 2.
        """
        term = 1 if d <= self.term1_end else 2
        return self._fraction(d, self.get_term_dates(term))

    @staticmethod
    def _fraction(d: date, dates: TermDates) -> float:
        length = (dates.end - dates.start).days
        if length <= 0:
            return 0.0
        return max(0.0, min(1.0, (d - dates.start).days / length))

    def days_from_now(self, d: date) -> int:
        return (d - self.current_date).days

    def is_past(self, d: date) -> bool:
        return d < self.current_date

    def to_dict(self) -> dict:
        return {
            "academic_year": self.academic_year,
            "term1": self.get_term_dates(1).model_dump(mode="json"),
            "term2": self.get_term_dates(2).model_dump(mode="json"),
            "current_date": self.current_date.isoformat(),
            "current_term": self.current_term,
            "term_progress": round(self.get_term_progress(), 4),
        }
