"""Pydantic value types exchanged by the scoring engine."""

from models.schemas.score import (
    SCHEME_MAXIMA,
    ATSScore,
    ExtractedKeywords,
    KeywordMatch,
    ScoreBreakdown,
    ScoreDetails,
    ScoringScheme,
)
from models.schemas.resume_data import ResumeData
from models.schemas.analysis_result import (
    EstimatedCompatibility,
    ProposedChange,
    ResumeAnalysisResult,
    ScoreCeiling,
)

__all__ = [
    "SCHEME_MAXIMA",
    "ATSScore",
    "ExtractedKeywords",
    "KeywordMatch",
    "ScoreBreakdown",
    "ScoreDetails",
    "ScoringScheme",
    "ResumeData",
    "EstimatedCompatibility",
    "ProposedChange",
    "ResumeAnalysisResult",
    "ScoreCeiling",
]
