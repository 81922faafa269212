"""
Dataset orchestration: students x terms x modules, plus aggregate analysis.
"""

import logging
import time
from datetime import date
from typing import Dict, List, Optional

from acadsynth.core.assessments import AssessmentGenerator
from acadsynth.core.calendar import AcademicCalendar
from acadsynth.core.models import DatasetAnalysis, Module, Student
from acadsynth.core.profile import StudentProfile
from acadsynth.core.risk import student_risk
from acadsynth.core.submissions import SubmissionGenerator
from acadsynth.shared.config import AcadSynthSettings, get_settings
from acadsynth.shared.exceptions import DatasetError
from acadsynth.shared.logging import get_logger, log_with_context
from acadsynth.shared.random_source import NumpyRandomSource, RandomSource

logger = get_logger(__name__)

TERMS = (1, 2)


class ModuleGenerator:
    """Build a student's modules for one term."""

    def __init__(
        self,
        settings: AcadSynthSettings,
        assessment_generator: AssessmentGenerator,
        submission_generator: SubmissionGenerator,
    ):
        self.catalog = settings.catalog
        self.assessment_generator = assessment_generator
        self.submission_generator = submission_generator

    def generate_for_student(self, profile: StudentProfile, term: int) -> List[Module]:
        modules = []
        for code in self.catalog.modules_for_term(term):
            assessments = self.assessment_generator.generate(code, term, profile)
            submissions = [
                self.submission_generator.generate(profile, assessment)
                for assessment in assessments
            ]
            modules.append(Module(
                code=code,
                name=self.catalog.modules[code],
                term=term,
                assessments=assessments,
                submissions=submissions,
            ))
        return modules


class DatasetGenerator:
    """
    Generate a complete synthetic dataset.

    One calendar and one random source are created per generator and shared
    by every downstream generator, so all assessments agree on the current
    date and a seeded source reproduces a run exactly.
    """

    def __init__(
        self,
        settings: Optional[AcadSynthSettings] = None,
        rng: Optional[RandomSource] = None,
        today: Optional[date] = None,
    ):
        self.settings = settings or get_settings()
        self.rng = rng or NumpyRandomSource(self.settings.dataset.seed)
        self.calendar = AcademicCalendar(self.settings.calendar, today=today)

        self.assessment_generator = AssessmentGenerator(
            self.calendar, self.rng, self.settings.assessments, self.settings.catalog
        )
        self.submission_generator = SubmissionGenerator(
            self.calendar,
            self.rng,
            self.settings.profile,
            self.settings.marking,
            self.settings.similarity,
        )
        self.module_generator = ModuleGenerator(
            self.settings, self.assessment_generator, self.submission_generator
        )

    def generate(self, num_students: Optional[int] = None) -> List[Student]:
        """
        Generate students with their modules, assessments and submissions.

        Args:
            num_students: Number of students (defaults to settings.dataset.num_students)

        Returns:
            Students in id order
        """
        if num_students is None:
            num_students = self.settings.dataset.num_students
        if num_students < 0:
            raise DatasetError(f"num_students must be non-negative, got {num_students}")

        start = time.perf_counter()
        logger.info(
            f"Generating dataset for {num_students} students",
            extra={"current_date": self.calendar.current_date.isoformat()},
        )

        students = [self._generate_student(i) for i in range(num_students)]

        logger.info(
            "Dataset generated",
            extra={
                "students": len(students),
                "elapsed_ms": round((time.perf_counter() - start) * 1000, 1),
            },
        )
        return students

    def _generate_student(self, index: int) -> Student:
        profile = StudentProfile.generate(self.settings.profile, self.rng)
        modules = []
        for term in TERMS:
            modules.extend(self.module_generator.generate_for_student(profile, term))

        student = Student(
            id=f"X{index + 1:08x}",
            name=f"Student {index + 1}",
            year=self.settings.catalog.student_year,
            program=self.rng.choice(self.settings.catalog.programs),
            profile=profile,
            modules=modules,
        )

        log_with_context(
            logger,
            logging.DEBUG,
            "Generated student",
            student_id=student.id,
            action="generate_student",
            program=student.program,
            modules_count=len(modules),
        )
        return student

    def analyze(self, dataset: List[Student]) -> DatasetAnalysis:
        """Aggregate submission, grade, programme and risk statistics."""
        return analyze_dataset(dataset)


def analyze_dataset(dataset: List[Student]) -> DatasetAnalysis:
    """Aggregate submission, grade, programme and risk statistics."""
    analysis = DatasetAnalysis(total_students=len(dataset))
    submission_stats: Dict[str, int] = {}
    grade_distribution: Dict[int, int] = {}
    program_distribution: Dict[str, int] = {}

    for student in dataset:
        program_distribution[student.program] = program_distribution.get(student.program, 0) + 1

        for submission in student.all_submissions():
            status = submission.status.value
            submission_stats[status] = submission_stats.get(status, 0) + 1

            if submission.grade is not None:
                bracket = (submission.grade // 10) * 10
                grade_distribution[bracket] = grade_distribution.get(bracket, 0) + 1

        analysis.risk_analysis[student_risk(student).value] += 1

    analysis.submission_stats = submission_stats
    analysis.grade_distribution = dict(sorted(grade_distribution.items()))
    analysis.program_distribution = program_distribution

    logger.debug("Dataset analysis complete", extra={"risk": analysis.risk_analysis})
    return analysis
