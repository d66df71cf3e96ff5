"""Impact recalculation after a reviewer edits a proposed change."""

from models.schemas.analysis_result import ProposedChange
from services.keyword_matcher import keyword_in_text
from services.sanitizer import round_half_up


def retained_keywords(change: ProposedChange, edited_text: str) -> list[str]:
    return [kw for kw in change.keywords_added if keyword_in_text(edited_text, kw)]


def calculate_edited_impact(change: ProposedChange, edited_text: str) -> float:
    """Whole-point impact earned by the keywords that survived the edit.

    A change with no target keywords keeps its original impact.
    """
    if not change.keywords_added:
        return change.impact_points

    per_keyword = change.impact_per_keyword
    if per_keyword is None:
        per_keyword = change.impact_points / len(change.keywords_added)

    return round_half_up(len(retained_keywords(change, edited_text)) * per_keyword)
