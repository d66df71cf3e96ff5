"""Quality signals for experience highlights: action verbs and quantified results."""

import re

from services.keyword_matcher import keyword_in_text
from services.sanitizer import round_half_up

# Strong opening verbs for highlight quality scoring
STRONG_VERBS = frozenset({
    "achieved", "administered", "advanced", "analyzed", "architected",
    "automated", "built", "collaborated", "conducted", "configured",
    "consolidated", "contributed", "coordinated", "created", "cut",
    "decreased", "delivered", "deployed", "designed", "developed",
    "directed", "drove", "eliminated", "enabled", "engineered", "enhanced",
    "established", "evaluated", "executed", "expanded", "facilitated",
    "founded", "generated", "grew", "headed", "identified", "implemented",
    "improved", "increased", "influenced", "initiated", "innovated",
    "integrated", "introduced", "launched", "led", "leveraged",
    "maintained", "managed", "mentored", "migrated", "modernized",
    "negotiated", "optimized", "orchestrated", "organized", "overhauled",
    "oversaw", "partnered", "performed", "pioneered", "planned", "presented",
    "processed", "produced", "programmed", "proposed", "published",
    "rebuilt", "reduced", "refactored", "refined", "remodeled",
    "resolved", "restructured", "revamped", "scaled", "secured", "shipped",
    "simplified", "spearheaded", "standardized", "streamlined",
    "strengthened", "supervised", "surpassed", "tested", "trained",
    "transformed", "tripled", "upgraded", "utilized",
})

# Quantified results: percentages, money, multipliers, counts of things
_METRICS_RE = re.compile(
    r"\d+(?:\.\d+)?\s*(?:%|percent\b)"
    r"|[$€£]\s?\d"
    r"|\b\d+(?:\.\d+)?\s*[kmb]\b"
    r"|\b\d+(?:\.\d+)?x\b"
    r"|\b\d[\d,]*\+?\s*(?:users|clients|requests|customers|endpoints|services"
    r"|teams?|members?|engineers?|people|reports|hours|days|weeks|months|ms|seconds)\b",
    re.IGNORECASE,
)

_LEADING_MARKER_RE = re.compile(r"^[\s•\-–—*►▪→]+")

# Points available to each signal on the content-quality component
METRICS_POINTS = 5.0
VERB_POINTS = 5.0
STUFFING_PENALTY = 2.0


def has_metrics(bullet: str) -> bool:
    return bool(_METRICS_RE.search(bullet))


def starts_with_action_verb(bullet: str) -> bool:
    words = _LEADING_MARKER_RE.sub("", bullet).split()
    if not words:
        return False
    first = words[0].lower().strip(",.;:")
    return first in STRONG_VERBS


def score_bullet(bullet: str, jd_keywords: list[str] | None = None) -> dict:
    """Score a single highlight on the quality rubric.

    Returns the individual signals and an overall score (0-100).
    """
    word_count = len(bullet.split())
    action_verb = starts_with_action_verb(bullet)
    metrics = has_metrics(bullet)
    length_ok = 10 <= word_count <= 35

    keyword_count = 0
    if jd_keywords:
        keyword_count = sum(1 for kw in jd_keywords if keyword_in_text(bullet, kw))

    score = 0
    if action_verb:
        score += 30
    if metrics:
        score += 35
    if length_ok:
        score += 15
    if keyword_count >= 2:
        score += 20
    elif keyword_count == 1:
        score += 10

    return {
        "text": bullet[:100],
        "has_action_verb": action_verb,
        "has_metrics": metrics,
        "length_ok": length_ok,
        "keyword_count": keyword_count,
        "quality_score": min(100, score),
    }


def content_quality_score(highlights: list[str], has_stuffing: bool = False) -> float:
    """Content-quality component: metric share and action-verb share of the
    highlights, 5 points each, less a fixed penalty for keyword stuffing.

    No highlights scores 0. Result is in [0, 10] with one decimal.
    """
    bullets = [h for h in highlights if h.strip()]
    if not bullets:
        return 0.0

    metric_share = sum(1 for b in bullets if has_metrics(b)) / len(bullets)
    verb_share = sum(1 for b in bullets if starts_with_action_verb(b)) / len(bullets)

    score = metric_share * METRICS_POINTS + verb_share * VERB_POINTS
    if has_stuffing:
        score -= STUFFING_PENALTY
    return round_half_up(max(0.0, score), 1)
