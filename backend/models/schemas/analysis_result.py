"""Resume generator artifacts: score ceiling, proposed edits and the analysis
result that bundles them with the before/after scores.

Numeric fields on these records come from an LLM and are clamped on the way in
rather than rejected.
"""

from pydantic import Field, field_validator

from models.schemas.base import CamelModel
from models.schemas.score import ATSScore, ScoreBreakdown
from services.sanitizer import sanitize_score_value


class ScoreCeiling(CamelModel):
    """Externally declared upper bound for a job/resume pairing."""
    maximum: float = 100.0
    blockers: list[str] = []
    to_reach_90: str = Field(default="", alias="toReach90")

    @field_validator("maximum", mode="before")
    @classmethod
    def _clamp_maximum(cls, value):
        # null means no declared ceiling
        if value is None:
            return 100.0
        return sanitize_score_value(value, 0, 100)


class ProposedChange(CamelModel):
    """One suggested resume edit with its self-reported score impact.

    ``section`` is an opaque path such as ``summary``,
    ``experience.<company>.bullet<N>`` or ``skills.<category>``.
    """
    section: str
    original: str = ""
    modified: str = ""
    reason: str = ""
    keywords_added: list[str] = []
    impact_points: float = 0.0
    impact_per_keyword: float | None = None

    @field_validator("impact_points", mode="before")
    @classmethod
    def _clamp_impact(cls, value):
        return sanitize_score_value(value, 0, 100)

    @field_validator("impact_per_keyword", mode="before")
    @classmethod
    def _clamp_impact_per_keyword(cls, value):
        if value is None:
            return None
        return sanitize_score_value(value, 0, 100)


class ResumeAnalysisResult(CamelModel):
    current_score: ATSScore
    optimized_score: ATSScore
    score_ceiling: ScoreCeiling | None = None
    proposed_changes: list[ProposedChange] = []

    @property
    def impact_sum(self) -> float:
        return sum(change.impact_points for change in self.proposed_changes)


class EstimatedCompatibility(CamelModel):
    """Before/after summary persisted with a generation log."""
    before: float = 0.0
    after: float = 0.0
    possible_max: float = 0.0
    breakdown: ScoreBreakdown = Field(default_factory=ScoreBreakdown)

    @field_validator("before", "after", "possible_max", mode="before")
    @classmethod
    def _clamp_scores(cls, value):
        return sanitize_score_value(value, 0, 100)
