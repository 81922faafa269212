"""
Latent student traits and the submission/grade parameters derived from them.
"""

from pydantic import BaseModel, ConfigDict, Field

from acadsynth.shared.config import ProfileConfig
from acadsynth.shared.logging import get_logger
from acadsynth.shared.random_source import RandomSource

logger = get_logger(__name__)


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


class GradeRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    min: int
    max: int


class SubmissionPattern(BaseModel):
    """Unnormalized outcome weights for a submission; callers normalize before sampling."""
    model_config = ConfigDict(frozen=True)

    on_time_prob: float = Field(ge=0.0)
    late_prob: float = Field(ge=0.0)
    missing_prob: float = Field(ge=0.0)

    def normalized(self) -> "SubmissionPattern":
        total = self.on_time_prob + self.late_prob + self.missing_prob
        if total <= 0:
            return SubmissionPattern(on_time_prob=1.0, late_prob=0.0, missing_prob=0.0)
        return SubmissionPattern(
            on_time_prob=self.on_time_prob / total,
            late_prob=self.late_prob / total,
            missing_prob=self.missing_prob / total,
        )


def submission_pattern_for(engagement: float, config: ProfileConfig) -> SubmissionPattern:
    """
    Shift the base outcome probabilities by engagement.

    Engaged students gain on-time probability and lose half that shift from
    each of late and missing. Negative results are clamped to zero.
    """
    shift = engagement * config.engagement_multiplier
    return SubmissionPattern(
        on_time_prob=max(0.0, config.base_on_time_prob + shift),
        late_prob=max(0.0, config.base_late_prob - shift / 2),
        missing_prob=max(0.0, config.base_missing_prob - shift / 2),
    )


class StudentProfile(BaseModel):
    """Per-student latent traits. Immutable once generated."""
    model_config = ConfigDict(frozen=True)

    base_ability: float
    consistency: float = Field(ge=0.0, le=1.0)
    base_engagement: float = Field(ge=0.0, le=1.0)
    grade_range: GradeRange
    submission_pattern: SubmissionPattern

    @classmethod
    def generate(cls, config: ProfileConfig, rng: RandomSource) -> "StudentProfile":
        """Draw a new profile."""
        base_ability = rng.randint(
            round(config.ability_min * 100), round(config.ability_max * 100)
        ) / 100
        consistency = rng.random()
        base_engagement = clamp(
            base_ability * config.ability_weight + rng.random() * config.engagement_noise,
            0.0, 1.0,
        )

        grade_range = GradeRange(
            min=round(config.grade_min_base + base_ability * config.grade_range_multiplier),
            max=round(config.grade_max_base + base_ability * config.grade_range_multiplier),
        )

        profile = cls(
            base_ability=base_ability,
            consistency=consistency,
            base_engagement=base_engagement,
            grade_range=grade_range,
            submission_pattern=submission_pattern_for(base_engagement, config),
        )
        logger.debug(
            "New profile created",
            extra={
                "base_ability": base_ability,
                "consistency": round(consistency, 3),
                "base_engagement": round(base_engagement, 3),
            },
        )
        return profile

    def engagement_at(self, term_progress: float, rng: RandomSource, jitter: float = 0.1) -> float:
        """
        Sample engagement for one assessment.

        Args:
            term_progress: Position of the assessment within its term (0-1).
                Accepted for call-site symmetry; the sample does not drift with it.
            rng: Random source for the jitter
            jitter: Half-width of the uniform jitter around base engagement

        Returns:
            Engagement in [0, 1]
        """
        return clamp(self.base_engagement + rng.uniform(-jitter, jitter), 0.0, 1.0)

    def pattern_at(self, engagement: float, config: ProfileConfig) -> SubmissionPattern:
        """Submission pattern re-derived for a sampled engagement."""
        return submission_pattern_for(engagement, config)
