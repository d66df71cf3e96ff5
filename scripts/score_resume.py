"""Score a structured resume against a job description and print JSON.

Optionally takes proposed changes: the optimized score is computed by
applying them to the resume text, and their impact points are normalized to
the achievable budget.

Usage:
    python scripts/score_resume.py --jd job.txt --resume resume.yaml \
        [--ceiling 85] [--changes changes.json] [--scheme legacy]
"""

import argparse
import json
import logging
import sys
from pathlib import Path

import yaml
from pydantic import ValidationError

# Add backend to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "backend"))

from config import settings  # noqa: E402
from models.schemas import ProposedChange, ResumeAnalysisResult, ResumeData, ScoreCeiling  # noqa: E402
from services.ats_scorer import calculate_ats_score, format_score_assessment, resume_data_to_text  # noqa: E402
from services.bullet_scorer import score_bullet  # noqa: E402
from services.impact_normalizer import normalize_impact_points  # noqa: E402
from services.score_utils import compute_possible_max_score  # noqa: E402

logger = logging.getLogger(__name__)


def load_structured(path: Path):
    """Read YAML or JSON (JSON is valid YAML, but keep its stricter errors)."""
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        return json.loads(text)
    return yaml.safe_load(text)


def apply_changes(resume_text: str, changes: list[ProposedChange]) -> str:
    """Replace each change's original text with its modification.

    Changes whose original text is absent are appended as new lines.
    """
    optimized = resume_text
    for change in changes:
        if change.original and change.original in optimized:
            optimized = optimized.replace(change.original, change.modified, 1)
        elif change.modified:
            logger.info("Original text for %s not found; appending", change.section)
            optimized = f"{optimized}\n{change.modified}"
    return optimized


def main(
    jd_path: Path,
    resume_path: Path,
    ceiling: float | None = None,
    changes_path: Path | None = None,
    scheme: str | None = None,
) -> dict:
    job_description = jd_path.read_text(encoding="utf-8")
    resume_data = ResumeData.model_validate(load_structured(resume_path) or {})
    resume_text = resume_data_to_text(resume_data)

    current = calculate_ats_score(job_description, resume_text, resume_data, scheme=scheme)
    score_ceiling = ScoreCeiling(maximum=ceiling) if ceiling is not None else None
    logger.info("Current score %.1f, match rate %.1f%%", current.total, current.details.match_rate)

    output = {
        "currentScore": current.to_payload(),
        "assessment": format_score_assessment(current.total),
        "highlights": [
            score_bullet(h, current.details.matched_keywords + current.details.missing_keywords)
            for h in resume_data.highlights()
        ],
    }

    if changes_path is not None:
        raw_changes = load_structured(changes_path) or []
        changes = [ProposedChange.model_validate(c) for c in raw_changes]
        optimized = calculate_ats_score(
            job_description, apply_changes(resume_text, changes), resume_data, scheme=scheme
        )
        result = normalize_impact_points(
            ResumeAnalysisResult(
                current_score=current,
                optimized_score=optimized,
                score_ceiling=score_ceiling,
                proposed_changes=changes,
            )
        )
        output["possibleMax"] = compute_possible_max_score(current.total, changes, score_ceiling)
        output["optimizedScore"] = optimized.to_payload()
        output["proposedChanges"] = [c.to_payload() for c in result.proposed_changes]
    else:
        output["possibleMax"] = compute_possible_max_score(current.total, [], score_ceiling)

    return output


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Score a resume against a job description")
    parser.add_argument("--jd", required=True, type=Path, help="Job description text file")
    parser.add_argument("--resume", required=True, type=Path, help="Structured resume (YAML or JSON)")
    parser.add_argument("--ceiling", type=float, default=None, help="Achievable score ceiling (0-100)")
    parser.add_argument("--changes", type=Path, default=None, help="Proposed changes (JSON or YAML list)")
    parser.add_argument("--scheme", choices=["current", "legacy"], default=None)
    args = parser.parse_args()

    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(message)s")

    for path in (args.jd, args.resume, args.changes):
        if path is not None and not path.is_file():
            parser.error(f"cannot read {path}")

    try:
        report = main(args.jd, args.resume, args.ceiling, args.changes, args.scheme)
    except (yaml.YAMLError, json.JSONDecodeError, UnicodeDecodeError, ValidationError) as e:
        parser.error(f"unreadable input: {e}")

    json.dump(report, sys.stdout, indent=2)
    sys.stdout.write("\n")
