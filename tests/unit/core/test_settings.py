"""
Tests for configuration loading and validation.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from acadsynth.shared.config import AcadSynthSettings, CatalogConfig, IntRange


def test_load_from_yaml(tmp_path):
    config_file = tmp_path / "acadsynth.yaml"
    config_file.write_text(
        "acadsynth:\n"
        "  dataset:\n"
        "    num_students: 12\n"
        "    seed: 5\n"
        "  assessments:\n"
        "    count: {min: 3, max: 3}\n"
        "  marking:\n"
        "    deadline_days: 14\n",
        encoding="utf-8",
    )

    loaded = AcadSynthSettings.load_from_yaml(config_file)

    assert loaded.dataset.num_students == 12
    assert loaded.dataset.seed == 5
    assert loaded.assessments.count == IntRange(min=3, max=3)
    assert loaded.marking.deadline_days == 14
    # Untouched sections keep their defaults
    assert loaded.calendar.target_fraction == 0.67
    assert loaded.similarity.max == 40


def test_missing_yaml_falls_back_to_defaults(tmp_path):
    loaded = AcadSynthSettings.load_from_yaml(tmp_path / "absent.yaml")

    assert loaded.dataset.num_students == 100
    assert loaded.dataset.seed is None
    assert [b.name for b in loaded.calendar.breaks] == ["winter", "spring"]


def test_shipped_yaml_matches_defaults():
    shipped = AcadSynthSettings.load_from_yaml(Path(__file__).parents[3] / "config" / "acadsynth.yaml")

    assert shipped.calendar == AcadSynthSettings().calendar
    assert shipped.catalog.modules == CatalogConfig().modules


def test_inverted_range_rejected():
    with pytest.raises(ValidationError):
        IntRange(min=5, max=2)


def test_invalid_break_window_rejected(tmp_path):
    config_file = tmp_path / "acadsynth.yaml"
    config_file.write_text(
        "acadsynth:\n"
        "  calendar:\n"
        "    breaks:\n"
        "      - {name: reading, month: 11, start_day: 10, end_day: 3}\n",
        encoding="utf-8",
    )

    with pytest.raises(ValidationError):
        AcadSynthSettings.load_from_yaml(config_file)


def test_modules_for_term_uses_catalog_offsets():
    catalog = CatalogConfig()

    assert catalog.modules_for_term(1) == ["ECM1400", "ECM1401", "ECM1402"]
    assert catalog.modules_for_term(2) == ["ECM2410", "ECM2411", "ECM2412"]

    narrow = CatalogConfig(modules_per_term=2, term_offsets={1: 1, 2: 8})
    assert narrow.modules_for_term(1) == ["ECM1401", "ECM1402"]
    assert narrow.modules_for_term(2) == ["ECM2413", "ECM2414"]


def test_empty_programme_list_rejected():
    with pytest.raises(ValidationError):
        CatalogConfig(programs=[])
