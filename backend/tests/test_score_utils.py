import math

import pytest

from models.schemas import EstimatedCompatibility, ProposedChange, ScoreBreakdown, ScoreCeiling
from models.schemas.score import ScoringScheme
from services.score_utils import (
    compute_capped_score,
    compute_possible_max_score,
    normalize_estimated_compatibility,
    sanitize_breakdown,
)


def change(impact: float) -> ProposedChange:
    return ProposedChange(section="summary", impact_points=impact)


class TestSanitizeBreakdown:
    def test_clamps_each_component_to_its_own_max(self):
        raw = {"keywordRelevance": 80, "skillsQuality": -4, "experienceAlignment": 12.5, "contentQuality": 30}
        result = sanitize_breakdown(raw)
        assert result.keyword_relevance == 45
        assert result.skills_quality == 0
        assert result.experience_alignment == 12.5
        assert result.content_quality == 10
        assert result.total <= 100

    def test_idempotent(self):
        once = sanitize_breakdown({"keyword_relevance": 50, "skills_quality": 20, "content_quality": math.nan})
        assert sanitize_breakdown(once) == once

    def test_valid_breakdown_unchanged(self):
        breakdown = ScoreBreakdown(
            keyword_relevance=30.5, skills_quality=20, experience_alignment=14, content_quality=6.2
        )
        assert sanitize_breakdown(breakdown) == breakdown

    def test_legacy_breakdown_keeps_scheme(self):
        result = sanitize_breakdown({"keywordRelevance": 44, "formatParseability": 99})
        assert result.scheme is ScoringScheme.LEGACY
        assert result.keyword_relevance == 40
        assert result.format_parseability == 15
        assert result.content_quality is None

    def test_explicit_scheme_overrides_inference(self):
        result = sanitize_breakdown({"keywordRelevance": 44}, scheme="legacy")
        assert result.keyword_relevance == 40
        assert result.format_parseability == 0

    def test_junk_input_gives_zero_breakdown(self):
        result = sanitize_breakdown("corrupted")
        assert result.total == 0
        assert sanitize_breakdown(None).total == 0


class TestComputeCappedScore:
    def test_ceiling_caps_result(self):
        assert compute_capped_score(47.6, 50, ScoreCeiling(maximum=78)) == 78

    def test_without_ceiling(self):
        assert compute_capped_score(60, 10.2) == pytest.approx(70.2)
        assert compute_capped_score(95, 20) == 100

    def test_sanitizes_inputs(self):
        assert compute_capped_score(math.nan, -5) == 0
        assert compute_capped_score(150, 0, ScoreCeiling(maximum=math.inf)) == 0
        assert compute_capped_score(40, math.inf) == 40

    def test_result_has_one_decimal(self):
        assert compute_capped_score(33.33, 0.04) == pytest.approx(33.4)


class TestComputePossibleMaxScore:
    def test_sums_impacts(self):
        assert compute_possible_max_score(60, [change(4), change(6.2)]) == pytest.approx(70.2)

    def test_capped_by_ceiling(self):
        result = compute_possible_max_score(60, [change(30), change(25)], ScoreCeiling(maximum=85))
        assert result == 85

    def test_no_changes_returns_current(self):
        assert compute_possible_max_score(61.25, []) == pytest.approx(61.3)


class TestNormalizeEstimatedCompatibility:
    def test_possible_max_not_below_after(self):
        result = normalize_estimated_compatibility({"before": 50, "after": 72, "possibleMax": 60})
        assert result.possible_max == 72

    def test_clamps_and_fills_missing(self):
        result = normalize_estimated_compatibility({"before": -10, "after": "n/a"})
        assert result.before == 0
        assert result.after == 0
        assert result.possible_max == 0
        assert result.breakdown.total == 0

    def test_accepts_model_instance(self):
        record = EstimatedCompatibility(before=40, after=65, possible_max=90)
        result = normalize_estimated_compatibility(record)
        assert result.possible_max == 90

    def test_breakdown_clamped(self):
        result = normalize_estimated_compatibility(
            {"after": 80, "possibleMax": 95, "breakdown": {"keywordRelevance": 99, "contentQuality": 5}}
        )
        assert result.breakdown.keyword_relevance == 45
        assert result.breakdown.content_quality == 5
