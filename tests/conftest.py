"""
Pytest fixtures for acadsynth tests.
"""

from datetime import date

import pytest

from acadsynth.core.calendar import AcademicCalendar
from acadsynth.core.dataset import DatasetGenerator
from acadsynth.core.profile import GradeRange, StudentProfile, SubmissionPattern
from acadsynth.shared.config import AcadSynthSettings
from acadsynth.shared.random_source import NumpyRandomSource, RandomSource

# Academic year 2024/25; the synthetic current date is 2025-02-27 (term 2)
TODAY = date(2025, 3, 1)


class FixedRandom(RandomSource):
    """
    Deterministic stand-in that always returns the same draws.

    `value` is returned by random(); `pick` chooses the low or high end of
    every uniform/randint range.
    """

    def __init__(self, value: float = 0.0, pick: str = "low"):
        self.value = value
        self.pick = pick

    def random(self) -> float:
        return self.value

    def uniform(self, low: float, high: float) -> float:
        return low if self.pick == "low" else high

    def randint(self, low: int, high: int) -> int:
        return low if self.pick == "low" else high


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def app_settings():
    """Default settings, independent of any YAML on disk."""
    return AcadSynthSettings()


@pytest.fixture
def calendar(app_settings):
    return AcademicCalendar(app_settings.calendar, today=TODAY)


@pytest.fixture
def rng():
    return NumpyRandomSource(seed=1234)


@pytest.fixture
def profile():
    """Mid-ability student with a fixed grade range."""
    return StudentProfile(
        base_ability=0.6,
        consistency=0.5,
        base_engagement=0.5,
        grade_range=GradeRange(min=60, max=70),
        submission_pattern=SubmissionPattern(on_time_prob=0.85, late_prob=0.05, missing_prob=0.0),
    )


@pytest.fixture
def generator(app_settings):
    return DatasetGenerator(app_settings, rng=NumpyRandomSource(seed=7), today=TODAY)


@pytest.fixture
def dataset(generator):
    return generator.generate(40)


@pytest.fixture
def fixed_random():
    """Factory for deterministic random sources."""
    return FixedRandom
