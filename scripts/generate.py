"""
CLI entry point for dataset generation.
"""

import argparse
import json
import sys
from pathlib import Path

from acadsynth.core.dataset import DatasetGenerator
from acadsynth.shared.config import AcadSynthSettings
from acadsynth.shared.logging import setup_logging


def main(argv=None):
    """Main entry point."""
    parser = argparse.ArgumentParser(description="acadsynth dataset generator")
    parser.add_argument(
        "--config",
        type=Path,
        default=Path("config/acadsynth.yaml"),
        help="YAML configuration file"
    )
    parser.add_argument(
        "--students",
        type=int,
        default=None,
        help="Number of students (defaults to the configured count)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for a reproducible dataset"
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write JSON here instead of stdout"
    )
    parser.add_argument(
        "--analyze",
        action="store_true",
        help="Include aggregate analysis in the output"
    )

    args = parser.parse_args(argv)

    settings = AcadSynthSettings.load_from_yaml(args.config)
    if args.seed is not None:
        settings.dataset.seed = args.seed

    setup_logging(settings.log_level, settings.log_file)

    generator = DatasetGenerator(settings)
    students = generator.generate(args.students)

    payload = {
        "calendar": generator.calendar.to_dict(),
        "students": [s.model_dump(mode="json") for s in students],
    }
    if args.analyze:
        payload["analysis"] = generator.analyze(students).model_dump(mode="json")

    text = json.dumps(payload, indent=2)
    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(text, encoding="utf-8")
        print(f"Wrote {len(students)} students to {args.output}", file=sys.stderr)
    else:
        print(text)


if __name__ == "__main__":
    main()
