"""Deterministic ATS compatibility scoring.

Current scheme (0-100 total):
- Keyword relevance: 0-45
- Skills quality: 0-25
- Experience alignment: 0-20
- Content quality: 0-10

The legacy scheme swaps content quality for a 0-15 format-parseability
component and caps keyword relevance at 40. Identical inputs always produce
identical output.
"""

import logging
import re

from config import settings
from models.schemas.resume_data import ResumeData
from models.schemas.score import (
    SCHEME_MAXIMA,
    ATSScore,
    ExtractedKeywords,
    KeywordMatch,
    ScoreBreakdown,
    ScoreDetails,
    ScoringScheme,
)
from services.bullet_scorer import content_quality_score
from services.keyword_extractor import (
    calculate_actual_keyword_density,
    calculate_keyword_density,
    calculate_match_rate,
    extract_keywords,
    match_keywords,
    stem_word,
    word_count,
)
from services.keyword_matcher import keyword_in_text
from services.sanitizer import round_half_up, sanitize_score_value
from services.section_parser import (
    extract_required_team_size,
    extract_required_years,
    extract_team_size,
)

logger = logging.getLogger(__name__)

# Points per matched keyword by how it matched; exact is the reference weight
MATCH_WEIGHTS = {"exact": 2.0, "stem": 1.5, "synonym": 1.0, "fuzzy": 1.0}
_FULL_WEIGHT = MATCH_WEIGHTS["exact"]

# Constant for the single-column, standard-header PDF the generator emits
FORMAT_PARSEABILITY_POINTS = 15.0

_SENIOR_TITLE_RE = re.compile(r"\b(?:manager|director|lead|senior|staff|principal)\b", re.IGNORECASE)


def _resolve_scheme(scheme: ScoringScheme | str | None) -> ScoringScheme:
    return ScoringScheme(scheme if scheme is not None else settings.scoring_scheme)


def keyword_relevance_score(match_details: list[KeywordMatch], keyword_count: int, maximum: float) -> float:
    """``maximum`` scaled by weighted hits over the all-exact ideal.

    Non-decreasing in the number of matched keywords.
    """
    if keyword_count == 0:
        return 0.0
    weighted = sum(MATCH_WEIGHTS[d.match_type] for d in match_details)
    score = maximum * weighted / (_FULL_WEIGHT * keyword_count)
    return round_half_up(sanitize_score_value(score, 0, maximum), 1)


def _skill_has(skills: list[str], term: str) -> bool:
    return any(skill == term or keyword_in_text(skill, term) for skill in skills)


def skills_quality_score(extracted: ExtractedKeywords, resume_data: ResumeData) -> float:
    """Skills section quality (0-25).

    - JD technologies present in resume skills: 15
    - Top five JD keywords present in skills: 5
    - Skills organised by category: 5 (flat list: 3)
    """
    skills = resume_data.all_skills()
    score = 0.0

    techs = extracted.technologies
    if techs:
        tech_matches = sum(1 for tech in techs if _skill_has(skills, tech))
        score += min(15.0, tech_matches / len(techs) * 15)
    elif skills:
        # No specific tech requirements: partial credit for having skills
        score += 10

    top_keywords = extracted.all[:5]
    aligned = sum(1 for kw in top_keywords if _skill_has(skills, kw))
    score += aligned / max(len(top_keywords), 1) * 5

    if resume_data.skills_by_category:
        score += 5
    elif resume_data.skills:
        score += 3

    return round_half_up(sanitize_score_value(score, 0, 25), 1)


def _title_keyword_hit(resume_title: str, keyword: str) -> bool:
    if keyword_in_text(resume_title, keyword):
        return True
    if " " in keyword:
        return False
    keyword_stem = stem_word(keyword)
    return any(stem_word(word) == keyword_stem for word in re.findall(r"[a-z0-9+#.]+", resume_title.lower()))


def experience_alignment_score(job_description: str, resume_data: ResumeData, extracted: ExtractedKeywords) -> float:
    """Experience alignment (0-20): years 8, team size 6, title 6."""
    score = 0.0

    jd_years = extract_required_years(job_description)
    resume_years = resume_data.years_experience
    if jd_years is not None and resume_years is not None:
        if resume_years >= jd_years:
            score += 8
        elif resume_years >= jd_years - 2:
            score += 5
        elif resume_years >= jd_years - 5:
            score += 2
    elif resume_years is not None and resume_years >= 5:
        score += 5

    jd_team = extract_required_team_size(job_description)
    resume_team = extract_team_size(resume_data.team_size, resume_data.highlights())
    if jd_team is not None and resume_team is not None:
        if resume_team >= jd_team:
            score += 6
        elif resume_team >= jd_team * 0.7:
            score += 4
        elif resume_team >= jd_team * 0.5:
            score += 2
    elif resume_team:
        score += 3

    title_keywords = extracted.from_title
    if title_keywords:
        hits = sum(1 for kw in title_keywords if _title_keyword_hit(resume_data.title, kw))
        score += hits / len(title_keywords) * 6
    elif _SENIOR_TITLE_RE.search(resume_data.title):
        score += 3

    return round_half_up(sanitize_score_value(score, 0, 20), 1)


def _fourth_component(
    scheme: ScoringScheme,
    resume_text: str,
    resume_data: ResumeData,
    has_stuffing: bool = False,
) -> dict[str, float]:
    if scheme is ScoringScheme.LEGACY:
        points = FORMAT_PARSEABILITY_POINTS if resume_text.strip() else 0.0
        return {"format_parseability": points}
    return {"content_quality": content_quality_score(resume_data.highlights(), has_stuffing)}


def calculate_ats_score(
    job_description: str,
    resume_text: str,
    resume_data: ResumeData | None = None,
    scheme: ScoringScheme | str | None = None,
) -> ATSScore:
    """Score a resume against a job description.

    Pure and deterministic: the same inputs and settings always give an
    identical ``ATSScore``.
    """
    resolved = _resolve_scheme(scheme)
    maxima = SCHEME_MAXIMA[resolved]
    resume_data = resume_data or ResumeData()

    if not job_description or not job_description.strip():
        logger.debug("Empty job description; scoring the %s component only", resolved.value)
        return ATSScore(
            breakdown=ScoreBreakdown(**_fourth_component(resolved, resume_text or "", resume_data)),
        )

    extracted = extract_keywords(job_description, settings.keyword_count)

    if not resume_text or not resume_text.strip():
        logger.debug("Empty resume; all %d keywords missing", len(extracted.all))
        zero = {name: 0.0 for name in maxima}
        return ATSScore(
            breakdown=ScoreBreakdown(**zero),
            details=ScoreDetails(
                missing_keywords=extracted.all,
                extracted_keywords=extracted,
            ),
        )

    matched, missing, match_details = match_keywords(extracted.all, resume_text)
    resume_words = word_count(resume_text)
    density = calculate_actual_keyword_density(resume_text, matched)
    stuffed = density["stuffed_keywords"]
    if stuffed:
        logger.info("Keyword stuffing detected: %s", ", ".join(stuffed))

    breakdown = ScoreBreakdown(
        keyword_relevance=keyword_relevance_score(match_details, len(extracted.all), maxima["keyword_relevance"]),
        skills_quality=skills_quality_score(extracted, resume_data),
        experience_alignment=experience_alignment_score(job_description, resume_data, extracted),
        **_fourth_component(resolved, resume_text, resume_data, bool(stuffed)),
    )

    score = ATSScore(
        breakdown=breakdown,
        details=ScoreDetails(
            match_rate=calculate_match_rate(len(matched), len(extracted.all)),
            keyword_density=calculate_keyword_density(len(matched), resume_words),
            matched_keywords=matched,
            missing_keywords=missing,
            extracted_keywords=extracted,
            match_details=match_details,
            stuffed_keywords=stuffed,
        ),
    )
    logger.debug(
        "ATS score %.1f (%s): %d/%d keywords matched",
        score.total, resolved.value, len(matched), len(extracted.all),
    )
    return score


def resume_data_to_text(data: ResumeData) -> str:
    """Flatten structured resume data to plain text for keyword matching."""
    parts: list[str] = []
    for value in (data.name, data.title, data.summary):
        if value:
            parts.append(value)

    if data.skills_by_category:
        for category in data.skills_by_category:
            parts.append(f"{category.category}: {', '.join(category.items)}")
    elif data.skills:
        parts.append("Skills: " + ", ".join(data.skills))

    for exp in data.experiences:
        if exp.title:
            parts.append(exp.title)
        if exp.company:
            parts.append(exp.company)
        parts.extend(exp.highlights)

    for edu in data.education:
        if edu.degree:
            parts.append(edu.degree)
        if edu.institution:
            parts.append(edu.institution)

    return "\n".join(parts)


def format_score_assessment(total: float) -> str:
    if total >= 85:
        return "Excellent match - very likely to pass ATS filters"
    if total >= 70:
        return "Good match - should pass most ATS systems"
    if total >= 55:
        return "Fair match - optimization recommended"
    return "Weak match - significant gaps identified"
