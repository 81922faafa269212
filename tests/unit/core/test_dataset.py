"""
Tests for dataset orchestration and analysis.
"""

from datetime import timedelta

import pytest

from acadsynth.core.dataset import DatasetGenerator
from acadsynth.core.models import SubmissionStatus
from acadsynth.core.risk import student_risk
from acadsynth.shared.exceptions import DatasetError
from acadsynth.shared.random_source import NumpyRandomSource


def test_dataset_structure(dataset, app_settings):
    assert len(dataset) == 40
    term1 = app_settings.catalog.modules_for_term(1)
    term2 = app_settings.catalog.modules_for_term(2)
    assert term1 == ["ECM1400", "ECM1401", "ECM1402"]
    assert term2 == ["ECM2410", "ECM2411", "ECM2412"]

    for i, student in enumerate(dataset):
        assert student.id == f"X{i + 1:08x}"
        assert student.name == f"Student {i + 1}"
        assert student.year == 2
        assert student.program in app_settings.catalog.programs
        assert [m.code for m in student.modules] == term1 + term2
        for module in student.modules:
            assert len(module.assessments) == len(module.submissions)
            for assessment, submission in zip(module.assessments, module.submissions):
                assert submission.assessment_id == assessment.id


def test_student_ids_are_unique(dataset):
    assert len({s.id for s in dataset}) == len(dataset)


def test_same_seed_reproduces_dataset(app_settings, today):
    first = DatasetGenerator(app_settings, rng=NumpyRandomSource(seed=99), today=today).generate(5)
    second = DatasetGenerator(app_settings, rng=NumpyRandomSource(seed=99), today=today).generate(5)

    assert [s.model_dump() for s in first] == [s.model_dump() for s in second]


def test_seed_from_settings_is_used(app_settings, today):
    app_settings.dataset.seed = 3
    first = DatasetGenerator(app_settings, today=today).generate(3)
    second = DatasetGenerator(app_settings, today=today).generate(3)

    assert [s.model_dump() for s in first] == [s.model_dump() for s in second]


def test_generators_share_one_calendar(generator):
    assert generator.assessment_generator.calendar is generator.calendar
    assert generator.submission_generator.calendar is generator.calendar
    assert generator.assessment_generator.rng is generator.rng
    assert generator.submission_generator.rng is generator.rng


def test_dataset_invariants(dataset, generator):
    """Cross-record rules hold for every generated submission."""
    calendar = generator.calendar
    current = calendar.current_date
    deadline_days = generator.settings.marking.deadline_days

    for student in dataset:
        for module in student.modules:
            for assessment, submission in module.pairs():
                assert calendar.is_valid_assessment_date(assessment.original_due_date)
                if assessment.has_extension:
                    assert assessment.due_date == assessment.original_due_date + timedelta(
                        days=assessment.extension_days
                    )
                else:
                    assert assessment.due_date == assessment.original_due_date

                assert (submission.grade is None) == (submission.feedback_date is None)
                assert (submission.grade is None) == (submission.feedback is None)

                if submission.grade is not None:
                    assert submission.status in (SubmissionStatus.SUBMITTED, SubmissionStatus.LATE)
                    assert submission.submission_date < submission.feedback_date <= current
                    assert submission.feedback_date <= submission.submission_date + timedelta(
                        days=deadline_days + 14
                    )

                if assessment.due_date > current:
                    assert submission.status in (SubmissionStatus.SUBMITTED, SubmissionStatus.PENDING)
                    assert submission.grade is None
                    if submission.status == SubmissionStatus.SUBMITTED:
                        assert submission.submission_date <= current
                else:
                    assert submission.status != SubmissionStatus.PENDING

                if submission.status == SubmissionStatus.LATE:
                    assert submission.submission_date > assessment.due_date


def test_negative_student_count_rejected(generator):
    with pytest.raises(DatasetError):
        generator.generate(-1)


def test_empty_dataset(generator):
    assert generator.generate(0) == []
    analysis = generator.analyze([])
    assert analysis.total_students == 0
    assert analysis.risk_analysis == {"high": 0, "medium": 0, "low": 0}


def test_analysis_matches_dataset(dataset, generator):
    analysis = generator.analyze(dataset)

    total_submissions = sum(len(s.all_submissions()) for s in dataset)
    graded = [sub.grade for s in dataset for sub in s.all_submissions() if sub.grade is not None]

    assert analysis.total_students == len(dataset)
    assert sum(analysis.submission_stats.values()) == total_submissions
    assert sum(analysis.grade_distribution.values()) == len(graded)
    assert all(bracket % 10 == 0 for bracket in analysis.grade_distribution)
    assert list(analysis.grade_distribution) == sorted(analysis.grade_distribution)
    assert sum(analysis.program_distribution.values()) == len(dataset)
    assert sum(analysis.risk_analysis.values()) == len(dataset)

    high = sum(1 for s in dataset if student_risk(s).value == "high")
    assert analysis.risk_analysis["high"] == high
