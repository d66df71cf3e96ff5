"""Rescale proposed-change impact estimates to the achievable score budget.

budget = max(0, min(ceiling, optimized total) - current total)

When the self-reported impacts sum past the budget every change is scaled by
budget / sum and truncated to cents, so the scaled sum never overshoots. The
truncation slack then goes to the change with the largest original impact.
"""

import logging

from models.schemas.analysis_result import ResumeAnalysisResult
from services.sanitizer import round_half_up, truncate

logger = logging.getLogger(__name__)


def impact_budget(result: ResumeAnalysisResult) -> float:
    ceiling = result.score_ceiling.maximum if result.score_ceiling is not None else 100.0
    return max(0.0, min(ceiling, result.optimized_score.total) - result.current_score.total)


def normalize_impact_points(result: ResumeAnalysisResult) -> ResumeAnalysisResult:
    """Return a copy of ``result`` whose impact points fit the budget.

    ``result`` itself is never modified; when no scaling is needed it is
    returned as is.
    """
    changes = result.proposed_changes
    raw_sum = sum(change.impact_points for change in changes)
    budget = impact_budget(result)

    if budget == 0 and raw_sum > 0:
        logger.warning(
            "Impact budget exhausted: current score %.1f, ceiling %.1f, optimized score %.1f; "
            "all impact points normalized to 0",
            result.current_score.total,
            result.score_ceiling.maximum if result.score_ceiling is not None else 100.0,
            result.optimized_score.total,
        )

    if raw_sum <= budget or raw_sum == 0:
        return result

    scale = budget / raw_sum
    scaled = []
    for change in changes:
        update = {"impact_points": truncate(change.impact_points * scale, 2)}
        if change.impact_per_keyword is not None:
            update["impact_per_keyword"] = truncate(change.impact_per_keyword * scale, 2)
        scaled.append(change.model_copy(update=update))

    scaled_sum = sum(change.impact_points for change in scaled)
    remainder = round_half_up((budget - scaled_sum) * 100) / 100
    if remainder > 0 and scaled:
        # Largest original impact absorbs the slack; first one wins ties
        largest = 0
        for i, change in enumerate(changes):
            if change.impact_points > changes[largest].impact_points:
                largest = i
        target = scaled[largest]
        scaled[largest] = target.model_copy(
            update={"impact_points": round_half_up((target.impact_points + remainder) * 100) / 100}
        )

    logger.debug(
        "Scaled %d changes by %.4f: raw sum %.2f -> budget %.2f",
        len(changes), scale, raw_sum, budget,
    )
    return result.model_copy(update={"proposed_changes": scaled})
