"""
Tests for the teacher marking view.
"""

from datetime import date

from acadsynth.core.models import SubmissionStatus
from acadsynth.views.teacher import build_marking_overview, collect_marking_queue


def _cohort(make_student, make_assessment, make_submission):
    first = make_student("X00000001", [
        (
            make_assessment("A1", date(2025, 2, 10)),
            make_submission("A1", SubmissionStatus.SUBMITTED, submitted=date(2025, 2, 5), grade=65),
        ),
        (
            make_assessment("A2", date(2025, 1, 20)),
            make_submission("A2", SubmissionStatus.SUBMITTED, submitted=date(2025, 1, 18), grade=70),
        ),
        (make_assessment("A3", date(2025, 3, 20)), make_submission("A3", SubmissionStatus.PENDING)),
        (make_assessment("A4", date(2025, 2, 5)), make_submission("A4", SubmissionStatus.MISSING)),
    ])
    second = make_student("X00000002", [
        (
            make_assessment(
                "A1", date(2025, 2, 17),
                original_due_date=date(2025, 2, 10), has_extension=True, extension_days=7,
            ),
            make_submission("A1", SubmissionStatus.SUBMITTED, submitted=date(2025, 2, 16)),
        ),
        (
            make_assessment("A2", date(2025, 1, 20)),
            make_submission(
                "A2", SubmissionStatus.LATE, submitted=date(2025, 1, 23), grade=52, similarity=40,
            ),
        ),
        (make_assessment("A3", date(2025, 3, 20)), make_submission("A3", SubmissionStatus.PENDING)),
        (make_assessment("A4", date(2025, 2, 5)), make_submission("A4", SubmissionStatus.MISSING)),
    ])
    return [first, second]


def test_marking_queue_aggregates_across_students(calendar, app_settings, make_student, make_assessment, make_submission):
    cohort = _cohort(make_student, make_assessment, make_submission)

    queue = collect_marking_queue(cohort, calendar, app_settings.marking, app_settings.similarity)

    assert [e["id"] for e in queue["incomplete"]] == ["A1"]
    assert [e["id"] for e in queue["completed"]] == ["A2"]

    a1 = queue["incomplete"][0]
    assert a1["total_submissions"] == 2
    assert a1["marked_submissions"] == 1
    # Earliest due date across students, deadline derived from it
    assert a1["due_date"] == date(2025, 2, 10)
    assert a1["marking_deadline"] == date(2025, 3, 3)
    assert {s["student_id"] for s in a1["submissions"]} == {"X00000001", "X00000002"}


def test_future_and_empty_assessments_are_left_out(calendar, app_settings, make_student, make_assessment, make_submission):
    cohort = _cohort(make_student, make_assessment, make_submission)

    queue = collect_marking_queue(cohort, calendar, app_settings.marking, app_settings.similarity)
    ids = [e["id"] for e in queue["incomplete"] + queue["completed"]]

    assert "A3" not in ids
    assert "A4" not in ids


def test_marking_overview_stats(calendar, app_settings, make_student, make_assessment, make_submission):
    cohort = _cohort(make_student, make_assessment, make_submission)

    overview = build_marking_overview(
        cohort, calendar, app_settings.marking, app_settings.similarity, app_settings.views
    )

    assert overview["stats"] == {
        "to_mark": 1,
        "completed": 2,
        "approaching_deadline": 1,
        "incomplete_assessments": 1,
        "high_similarity": 1,
    }


def test_generated_dataset_queue_is_ordered(dataset, generator, app_settings):
    queue = collect_marking_queue(
        dataset, generator.calendar, app_settings.marking, app_settings.similarity
    )

    deadlines = [e["marking_deadline"] for e in queue["incomplete"]]
    assert deadlines == sorted(deadlines)
    for entry in queue["incomplete"] + queue["completed"]:
        assert entry["due_date"] <= generator.calendar.current_date
        assert entry["marked_submissions"] <= entry["total_submissions"]


def test_high_similarity_hand_ins_are_flagged(calendar, app_settings, make_student, make_assessment, make_submission):
    """Similarity at the threshold is flagged, just below it is not."""
    threshold = app_settings.similarity.high_threshold
    cohort = [
        make_student("X00000001", [(
            make_assessment("A1", date(2025, 2, 10)),
            make_submission("A1", SubmissionStatus.SUBMITTED, submitted=date(2025, 2, 9), similarity=threshold),
        )]),
        make_student("X00000002", [(
            make_assessment("A1", date(2025, 2, 10)),
            make_submission("A1", SubmissionStatus.SUBMITTED, submitted=date(2025, 2, 8), similarity=threshold - 1),
        )]),
    ]

    queue = collect_marking_queue(cohort, calendar, app_settings.marking, app_settings.similarity)

    entry = queue["incomplete"][0]
    assert entry["high_similarity"] == 1
    flags = {s["student_id"]: s["high_similarity"] for s in entry["submissions"]}
    assert flags == {"X00000001": True, "X00000002": False}


def test_similarity_threshold_comes_from_config(calendar, app_settings, make_student, make_assessment, make_submission):
    cohort = [make_student("X00000001", [(
        make_assessment("A1", date(2025, 2, 10)),
        make_submission("A1", SubmissionStatus.SUBMITTED, submitted=date(2025, 2, 9), similarity=25),
    )])]
    strict = app_settings.similarity.model_copy(update={"high_threshold": 20})

    overview = build_marking_overview(cohort, calendar, app_settings.marking, strict, app_settings.views)

    assert overview["stats"]["high_similarity"] == 1
