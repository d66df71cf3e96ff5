"""Score value types: breakdown, per-keyword match detail and the ATS score."""

from enum import Enum
from typing import Literal

from pydantic import Field, computed_field, model_validator
from pydantic.alias_generators import to_camel

from models.schemas.base import CamelModel
from services.sanitizer import round_half_up, sanitize_score_value


class ScoringScheme(str, Enum):
    CURRENT = "current"
    LEGACY = "legacy"


# Per-component maxima; each scheme sums to exactly 100.
SCHEME_MAXIMA: dict[ScoringScheme, dict[str, float]] = {
    ScoringScheme.CURRENT: {
        "keyword_relevance": 45,
        "skills_quality": 25,
        "experience_alignment": 20,
        "content_quality": 10,
    },
    ScoringScheme.LEGACY: {
        "keyword_relevance": 40,
        "skills_quality": 25,
        "experience_alignment": 20,
        "format_parseability": 15,
    },
}

KeywordPriority = Literal["title", "required", "responsibilities", "nice_to_have", "general"]
MatchType = Literal["exact", "stem", "synonym", "fuzzy"]


class ScoreBreakdown(CamelModel):
    """Four weighted components of an ATS score.

    The fourth component is ``content_quality`` under the current scheme and
    ``format_parseability`` under the legacy one; exactly one is set.
    """
    keyword_relevance: float = 0.0
    skills_quality: float = 0.0
    experience_alignment: float = 0.0
    content_quality: float | None = None
    format_parseability: float | None = None

    @model_validator(mode="before")
    @classmethod
    def _sanitize_components(cls, data):
        """Clamp each component into [0, its max]; junk degrades to 0.

        The scheme is legacy when only ``format_parseability`` is given, else
        current. A breakdown with neither fourth component gets content 0.
        """
        if not isinstance(data, dict):
            return data
        data = dict(data)

        def key_for(name: str) -> str:
            camel = to_camel(name)
            return camel if name not in data and camel in data else name

        has_content = data.get(key_for("content_quality")) is not None
        has_format = data.get(key_for("format_parseability")) is not None
        if not has_content and not has_format:
            data[key_for("content_quality")] = 0.0
            has_content = True

        scheme = ScoringScheme.LEGACY if has_format and not has_content else ScoringScheme.CURRENT
        for name, maximum in SCHEME_MAXIMA[scheme].items():
            key = key_for(name)
            data[key] = sanitize_score_value(data.get(key), 0, maximum)
        return data

    @model_validator(mode="after")
    def _single_fourth_component(self):
        if self.content_quality is not None and self.format_parseability is not None:
            raise ValueError("breakdown carries both content_quality and format_parseability")
        if self.content_quality is None and self.format_parseability is None:
            raise ValueError("breakdown needs content_quality or format_parseability")
        return self

    @property
    def scheme(self) -> ScoringScheme:
        if self.format_parseability is not None:
            return ScoringScheme.LEGACY
        return ScoringScheme.CURRENT

    def maxima(self) -> dict[str, float]:
        return SCHEME_MAXIMA[self.scheme]

    def components(self) -> dict[str, float]:
        return {name: getattr(self, name) for name in self.maxima()}

    @property
    def total(self) -> float:
        return round_half_up(sum(self.components().values()), 1)


class KeywordMatch(CamelModel):
    """How a single JD keyword was found in the resume."""
    keyword: str
    match_type: MatchType = "exact"
    matched_as: str = ""  # synonym, stem or fuzzy term that hit; empty for exact


class ExtractedKeywords(CamelModel):
    """JD keywords in priority order plus the buckets they came from."""
    all: list[str] = []
    from_title: list[str] = []
    from_required: list[str] = []
    from_nice_to_have: list[str] = []
    technologies: list[str] = []
    action_verbs: list[str] = []
    keyword_priorities: dict[str, KeywordPriority] = {}
    keyword_frequency: dict[str, int] = {}


class ScoreDetails(CamelModel):
    match_rate: float = 0.0  # 0-100, one decimal
    keyword_density: float = 0.0  # 0-100, one decimal
    matched_keywords: list[str] = []
    missing_keywords: list[str] = []
    extracted_keywords: ExtractedKeywords = Field(default_factory=ExtractedKeywords)
    match_details: list[KeywordMatch] = []
    stuffed_keywords: list[str] = []

    @model_validator(mode="after")
    def _disjoint_keyword_lists(self):
        matched, missing = self.matched_keywords, self.missing_keywords
        if len(set(matched)) != len(matched) or len(set(missing)) != len(missing):
            raise ValueError("keyword lists must not contain duplicates")
        overlap = set(matched) & set(missing)
        if overlap:
            raise ValueError(f"keywords both matched and missing: {sorted(overlap)}")
        return self


# Jobscan's 75% score / 65% match-rate targets
ATS_OPTIMIZED_SCORE = 75
ATS_OPTIMIZED_MATCH_RATE = 65


class ATSScore(CamelModel):
    """Computed compatibility score. ``total`` always equals the breakdown sum."""
    breakdown: ScoreBreakdown = Field(default_factory=ScoreBreakdown)
    details: ScoreDetails = Field(default_factory=ScoreDetails)

    @computed_field
    @property
    def total(self) -> float:
        return self.breakdown.total

    @computed_field(alias="isATSOptimized")
    @property
    def is_ats_optimized(self) -> bool:
        return (
            self.total >= ATS_OPTIMIZED_SCORE
            and self.details.match_rate >= ATS_OPTIMIZED_MATCH_RATE
        )
