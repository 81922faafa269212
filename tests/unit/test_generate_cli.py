"""
Tests for the dataset generation CLI.
"""

import json

from generate import main


def test_cli_writes_dataset_json(tmp_path):
    output = tmp_path / "out" / "dataset.json"

    main([
        "--config", str(tmp_path / "absent.yaml"),
        "--students", "3",
        "--seed", "4",
        "--output", str(output),
        "--analyze",
    ])

    payload = json.loads(output.read_text(encoding="utf-8"))
    assert [s["id"] for s in payload["students"]] == ["X00000001", "X00000002", "X00000003"]
    assert payload["analysis"]["total_students"] == 3
    assert "current_date" in payload["calendar"]


def test_cli_seed_is_reproducible(tmp_path):
    first = tmp_path / "a.json"
    second = tmp_path / "b.json"

    for output in (first, second):
        main(["--config", str(tmp_path / "absent.yaml"), "--students", "2", "--seed", "8", "--output", str(output)])

    assert first.read_text(encoding="utf-8") == second.read_text(encoding="utf-8")


def test_cli_prints_to_stdout(tmp_path, capsys):
    main(["--config", str(tmp_path / "absent.yaml"), "--students", "1", "--seed", "1"])

    payload = json.loads(capsys.readouterr().out)
    assert len(payload["students"]) == 1
    assert "analysis" not in payload
