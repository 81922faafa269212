"""
Configuration management for acadsynth.
Loads from config/acadsynth.yaml and environment variables.
"""

from pathlib import Path
from typing import Optional, Dict, Any, List
import yaml
from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class IntRange(BaseModel):
    """Inclusive integer range."""
    min: int
    max: int

    @model_validator(mode="after")
    def _check_order(self) -> "IntRange":
        if self.min > self.max:
            raise ValueError(f"range min {self.min} exceeds max {self.max}")
        return self


class BreakWindow(BaseModel):
    """
    A recurring holiday window.

    `inclusive` controls whether the first and last day block due dates. The
    synthetic current date always avoids the whole window, edges included.
    """
    name: str
    month: int = Field(ge=1, le=12)
    start_day: int = Field(ge=1, le=31)
    end_day: int = Field(ge=1, le=31)
    inclusive: bool = True

    @model_validator(mode="after")
    def _check_days(self) -> "BreakWindow":
        if self.start_day > self.end_day:
            raise ValueError(f"break window {self.name} starts after it ends")
        return self


class CalendarConfig(BaseSettings):
    """Academic calendar configuration (months are 1-based)."""
    term1_start_month: int = Field(default=9, ge=1, le=12)
    term1_start_day: int = Field(default=23, ge=1, le=31)
    term1_end_month: int = Field(default=12, ge=1, le=12)
    term1_end_day: int = Field(default=15, ge=1, le=31)
    term2_start_month: int = Field(default=1, ge=1, le=12)
    term2_start_day: int = Field(default=13, ge=1, le=31)
    term2_end_month: int = Field(default=5, ge=1, le=12)
    term2_end_day: int = Field(default=15, ge=1, le=31)
    target_fraction: float = Field(default=0.67, gt=0.0, lt=1.0)
    winter_gap_fraction: float = Field(default=0.25, ge=0.0, le=1.0)
    break_resume_days: int = Field(default=7, ge=1)
    breaks: List[BreakWindow] = Field(default_factory=lambda: [
        BreakWindow(name="winter", month=12, start_day=16, end_day=31),
        BreakWindow(name="spring", month=4, start_day=1, end_day=15, inclusive=False),
    ])

    model_config = SettingsConfigDict(env_prefix="CALENDAR_", extra="ignore")


class ProfileConfig(BaseSettings):
    """Student profile generation parameters."""
    ability_min: float = Field(default=0.2, ge=0.0, le=1.0)
    ability_max: float = Field(default=1.0, ge=0.0, le=1.0)
    ability_weight: float = Field(default=0.4, ge=0.0)
    engagement_noise: float = Field(default=0.3, ge=0.0)
    engagement_jitter: float = Field(default=0.1, ge=0.0)
    grade_min_base: int = Field(default=35)
    grade_max_base: int = Field(default=45)
    grade_range_multiplier: int = Field(default=55)
    grade_variation: int = Field(default=15)
    base_on_time_prob: float = Field(default=0.75, ge=0.0)
    base_late_prob: float = Field(default=0.10, ge=0.0)
    base_missing_prob: float = Field(default=0.05, ge=0.0)
    engagement_multiplier: float = Field(default=0.2, ge=0.0)

    model_config = SettingsConfigDict(env_prefix="PROFILE_", extra="ignore")

    @model_validator(mode="after")
    def _check_ability(self) -> "ProfileConfig":
        if self.ability_min > self.ability_max:
            raise ValueError("ability_min exceeds ability_max")
        return self


class AssessmentConfig(BaseSettings):
    """Assessment generation and extension parameters."""
    count: IntRange = Field(default_factory=lambda: IntRange(min=2, max=3))
    weight: IntRange = Field(default_factory=lambda: IntRange(min=20, max=50))
    submission_window_days: IntRange = Field(default_factory=lambda: IntRange(min=14, max=21))
    coursework_prob: float = Field(default=0.6, ge=0.0, le=1.0)
    project_prob: float = Field(default=0.7, ge=0.0, le=1.0)
    extension_rate: float = Field(default=0.15, ge=0.0, le=1.0)
    short_extension_days: int = Field(default=7, ge=1)
    long_extension_days: int = Field(default=14, ge=1)
    short_extension_prob: float = Field(default=0.7, ge=0.0, le=1.0)
    extension_window_days: int = Field(default=45, ge=0)
    placement_step_days: int = Field(default=3, ge=1)
    placement_max_attempts: int = Field(default=10, ge=0)
    progress_window: float = Field(default=0.15, ge=0.0, le=1.0)

    model_config = SettingsConfigDict(env_prefix="ASSESSMENTS_", extra="ignore")


class MarkingConfig(BaseSettings):
    """Marking delay simulation parameters."""
    deadline_days: int = Field(default=21, ge=1)
    on_time_prob: float = Field(default=0.85, ge=0.0)
    late_prob: float = Field(default=0.12, ge=0.0)
    very_late_prob: float = Field(default=0.03, ge=0.0)
    late_window_days: int = Field(default=7, ge=0)
    very_late_window_days: int = Field(default=14, ge=0)
    late_penalty: int = Field(default=10, ge=0)
    late_grade_floor: int = Field(default=40, ge=0)

    model_config = SettingsConfigDict(env_prefix="MARKING_", extra="ignore")


class SimilarityConfig(BaseSettings):
    """Similarity (plagiarism-style) score range."""
    min: int = Field(default=5, ge=0, le=100)
    max: int = Field(default=40, ge=0, le=100)
    high_threshold: int = Field(default=40, ge=0, le=100)

    model_config = SettingsConfigDict(env_prefix="SIMILARITY_", extra="ignore")


class CatalogConfig(BaseSettings):
    """Fixed module catalog and programme labels."""
    modules: Dict[str, str] = Field(default_factory=lambda: {
        "ECM1400": "Programming",
        "ECM1401": "Discrete Mathematics",
        "ECM1402": "Computer Systems",
        "ECM1403": "Data Structures",
        "ECM1404": "Professional Development",
        "ECM2410": "Algorithms",
        "ECM2411": "Database Systems",
        "ECM2412": "Software Engineering",
        "ECM2413": "Artificial Intelligence",
        "ECM2414": "Web Development",
    })
    programs: List[str] = Field(default_factory=lambda: [
        "Computer Science", "Data Science", "Applied AI"
    ])
    modules_per_term: int = Field(default=3, ge=1)
    term_offsets: Dict[int, int] = Field(default_factory=lambda: {1: 0, 2: 5})
    student_year: int = Field(default=2, ge=1)

    model_config = SettingsConfigDict(env_prefix="CATALOG_", extra="ignore")

    @field_validator("programs")
    @classmethod
    def _programs_not_empty(cls, value: List[str]) -> List[str]:
        if not value:
            raise ValueError("at least one programme is required")
        return value

    def modules_for_term(self, term: int) -> List[str]:
        """Module codes taught in a term, by fixed catalog position."""
        codes = list(self.modules)
        start = self.term_offsets.get(term, 0)
        return codes[start:start + self.modules_per_term]


class DatasetConfig(BaseSettings):
    """Dataset generation defaults."""
    num_students: int = Field(default=100, ge=0, alias="DATASET_NUM_STUDENTS")
    seed: Optional[int] = Field(default=None, alias="DATASET_SEED")

    model_config = SettingsConfigDict(env_prefix="DATASET_", extra="ignore", populate_by_name=True)


class ViewsConfig(BaseSettings):
    """Role view derivation parameters."""
    late_submission_window_days: int = Field(default=14, ge=0)
    marking_warning_days: int = Field(default=7, ge=0)
    upcoming_deadlines_limit: int = Field(default=5, ge=1)

    model_config = SettingsConfigDict(env_prefix="VIEWS_", extra="ignore")


class ApiConfig(BaseSettings):
    """API server configuration."""
    host: str = Field(default="0.0.0.0", alias="API_HOST")
    port: int = Field(default=8000, alias="API_PORT")
    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000"])

    model_config = SettingsConfigDict(env_prefix="API_", extra="ignore", populate_by_name=True)


class AcadSynthSettings(BaseSettings):
    """Main acadsynth configuration."""
    env: str = Field(default="dev", alias="ACADSYNTH_ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_file: Optional[Path] = Field(default=None, alias="LOG_FILE")

    # Sub-configurations
    calendar: CalendarConfig = Field(default_factory=CalendarConfig)
    profile: ProfileConfig = Field(default_factory=ProfileConfig)
    assessments: AssessmentConfig = Field(default_factory=AssessmentConfig)
    marking: MarkingConfig = Field(default_factory=MarkingConfig)
    similarity: SimilarityConfig = Field(default_factory=SimilarityConfig)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    dataset: DatasetConfig = Field(default_factory=DatasetConfig)
    views: ViewsConfig = Field(default_factory=ViewsConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="allow",
        populate_by_name=True,
    )

    @classmethod
    def load_from_yaml(cls, config_path: Optional[Path] = None) -> "AcadSynthSettings":
        """Load settings from YAML file and merge with environment variables."""
        if config_path is None:
            config_path = Path("config/acadsynth.yaml")

        config_dict: Dict[str, Any] = {}

        if config_path.exists():
            with open(config_path, "r", encoding="utf-8") as f:
                yaml_data = yaml.safe_load(f) or {}
                config_dict = yaml_data.get("acadsynth", {})

        return cls(**config_dict)


# Global settings instance
_settings: Optional[AcadSynthSettings] = None


def get_settings() -> AcadSynthSettings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = AcadSynthSettings.load_from_yaml()
    return _settings


# Alias for convenience
settings = get_settings()
