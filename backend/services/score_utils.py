"""Breakdown sanitizing and score-ceiling resolution."""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic.alias_generators import to_camel

from config import settings
from models.schemas.analysis_result import EstimatedCompatibility, ProposedChange, ScoreCeiling
from models.schemas.score import SCHEME_MAXIMA, ScoreBreakdown, ScoringScheme
from services.sanitizer import round_half_up, sanitize_score_value

logger = logging.getLogger(__name__)


def _field(raw: Mapping, name: str) -> Any:
    if name in raw:
        return raw[name]
    return raw.get(to_camel(name))


def _infer_scheme(raw: Mapping) -> ScoringScheme:
    if _field(raw, "format_parseability") is not None and _field(raw, "content_quality") is None:
        return ScoringScheme.LEGACY
    if _field(raw, "content_quality") is not None:
        return ScoringScheme.CURRENT
    return ScoringScheme(settings.scoring_scheme)


def sanitize_breakdown(
    breakdown: ScoreBreakdown | Mapping | None,
    scheme: ScoringScheme | str | None = None,
) -> ScoreBreakdown:
    """Clamp each component into ``[0, component max]`` for its scheme.

    Accepts a ``ScoreBreakdown`` or any mapping with snake_case or camelCase
    keys (e.g. a persisted JSON blob). Missing or junk components become 0.
    A field-wise map: the result is never re-normalized.
    """
    if isinstance(breakdown, ScoreBreakdown):
        raw: Mapping = breakdown.model_dump()
        inferred = breakdown.scheme
    elif isinstance(breakdown, Mapping):
        raw = breakdown
        inferred = _infer_scheme(breakdown)
    else:
        if breakdown is not None:
            logger.warning("Discarding non-mapping breakdown of type %s", type(breakdown).__name__)
        raw = {}
        inferred = ScoringScheme(settings.scoring_scheme)

    resolved = ScoringScheme(scheme) if scheme is not None else inferred
    values = {
        name: sanitize_score_value(_field(raw, name), 0, maximum)
        for name, maximum in SCHEME_MAXIMA[resolved].items()
    }
    return ScoreBreakdown(**values)


def _ceiling_maximum(score_ceiling: ScoreCeiling | None) -> float:
    if score_ceiling is None:
        return 100.0
    return sanitize_score_value(score_ceiling.maximum, 0, 100)


def compute_capped_score(
    current_score: Any,
    delta: Any,
    score_ceiling: ScoreCeiling | None = None,
) -> float:
    """Current score plus ``delta``, capped at the ceiling (100 without one).

    All three inputs are sanitized to [0, 100]; result has one decimal.
    """
    base = sanitize_score_value(current_score, 0, 100)
    increment = sanitize_score_value(delta, 0, 100)
    ceiling = _ceiling_maximum(score_ceiling)
    return round_half_up(min(ceiling, base + increment), 1)


def compute_possible_max_score(
    current_total: Any,
    proposed_changes: Iterable[ProposedChange],
    score_ceiling: ScoreCeiling | None = None,
) -> float:
    """Best case if every proposed change is accepted, before normalization."""
    total_delta = sum(sanitize_score_value(c.impact_points, 0, 100) for c in proposed_changes)
    return compute_capped_score(current_total, total_delta, score_ceiling)


def normalize_estimated_compatibility(raw: Mapping | EstimatedCompatibility | None) -> EstimatedCompatibility:
    """Sanitize a persisted before/after/possible-max record.

    ``possible_max`` is clamped to ``[after, 100]`` so the displayed
    potential never sits below the achieved score.
    """
    if isinstance(raw, EstimatedCompatibility):
        raw = raw.model_dump()
    if not isinstance(raw, Mapping):
        raw = {}

    before = sanitize_score_value(_field(raw, "before"), 0, 100)
    after = sanitize_score_value(_field(raw, "after"), 0, 100)
    possible_max = sanitize_score_value(_field(raw, "possible_max"), after, 100)
    return EstimatedCompatibility(
        before=before,
        after=after,
        possible_max=possible_max,
        breakdown=sanitize_breakdown(_field(raw, "breakdown")),
    )
