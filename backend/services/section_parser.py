"""Job description segmentation plus experience, team-size and title signals."""

import re
from typing import Literal, NamedTuple

SectionType = Literal["required", "nice_to_have", "responsibilities", "about", "unknown"]


class JDSection(NamedTuple):
    type: SectionType
    header: str
    content: str


# Header markers per section type. Nice-to-have is checked before required so
# "preferred qualifications" does not fall into the generic "qualifications".
SECTION_MARKERS: dict[str, list[str]] = {
    "nice_to_have": [
        "nice to have", "nice-to-have", "preferred", "bonus", "plus", "ideal",
        "desired", "additionally", "it would be great if", "extra credit",
        "additional qualifications", "desirable", "a plus", "advantageous",
    ],
    "required": [
        "required", "requirements", "must have", "minimum qualifications",
        "what you bring", "what we require", "essential", "mandatory",
        "what you'll need", "qualifications", "what we're looking for",
        "you should have", "key skills", "core requirements",
        "basic qualifications", "you will need", "key qualifications",
    ],
    "responsibilities": [
        "responsibilities", "what you'll do", "what you will do", "your role",
        "the role", "job duties", "key responsibilities", "day to day",
        "day-to-day", "in this role", "you will", "duties", "scope",
        "about the role", "role overview",
    ],
    "about": [
        "about us", "about the company", "who we are", "our mission",
        "company overview", "about the team", "why join", "what we offer",
        "benefits", "perks", "compensation",
    ],
}

# Inline signal words only switch between these three when no headers exist
_FALLBACK_TYPES = ("nice_to_have", "required", "responsibilities")

_MARKDOWN_HEADER_RE = re.compile(r"^#{1,3}\s+")
_BOLD_HEADER_RE = re.compile(r"^\*\*[^*]+\*\*\s*$")
_CAPS_HEADER_RE = re.compile(r"^[A-Z][A-Z\s/&-]{3,}$")
_COLON_HEADER_RE = re.compile(r"^[A-Za-z][A-Za-z\s'’-]{2,}:\s*$")


def _is_header(line: str) -> bool:
    stripped = line.strip()
    if not stripped:
        return False
    if _MARKDOWN_HEADER_RE.match(stripped) or _BOLD_HEADER_RE.match(stripped):
        return True
    if _CAPS_HEADER_RE.match(stripped) and len(stripped) < 80:
        return True
    if _COLON_HEADER_RE.match(stripped):
        return True
    return stripped.endswith(":") and len(stripped) < 80 and not stripped.startswith("-")


def _clean_header(line: str) -> str:
    header = _MARKDOWN_HEADER_RE.sub("", line.strip())
    header = header.strip("*")
    return re.sub(r":\s*$", "", header).strip()


def classify_section(header: str) -> SectionType:
    """Map a header (or inline line) to a section type by marker substring."""
    lower = header.lower()
    for section_type, markers in SECTION_MARKERS.items():
        if any(marker in lower for marker in markers):
            return section_type
    return "unknown"


def _fallback_sections(job_description: str) -> list[JDSection]:
    """Segment a header-less JD on inline signal words."""
    sections: list[JDSection] = []
    current_type: SectionType = "unknown"
    current_lines: list[str] = []

    for line in job_description.split("\n"):
        lower = line.lower().strip()
        detected = None
        for section_type in _FALLBACK_TYPES:
            if any(marker in lower for marker in SECTION_MARKERS[section_type]):
                detected = section_type
                break

        if detected and detected != current_type:
            if current_lines:
                sections.append(JDSection(current_type, "", "\n".join(current_lines).strip()))
            current_type = detected
            current_lines = [line]
        else:
            current_lines.append(line)

    if current_lines:
        sections.append(JDSection(current_type, "", "\n".join(current_lines).strip()))
    if not sections:
        sections.append(JDSection("unknown", "", job_description.strip()))
    return sections


def parse_jd_sections(job_description: str) -> list[JDSection]:
    """Split a job description into typed sections.

    Headers are markdown ``#`` lines, ``**bold**`` lines, ALL-CAPS lines and
    short colon-terminated lines. Content runs until the next header. A JD
    with no headers falls back to inline signal-word segmentation.
    """
    lines = job_description.split("\n")
    header_positions = [(i, _clean_header(line)) for i, line in enumerate(lines) if _is_header(line)]
    if not header_positions:
        return _fallback_sections(job_description)

    sections: list[JDSection] = []
    for n, (line_no, header) in enumerate(header_positions):
        end = header_positions[n + 1][0] if n + 1 < len(header_positions) else len(lines)
        content = "\n".join(lines[line_no + 1:end]).strip()
        sections.append(JDSection(classify_section(header), header, content))
    return sections


# ---------------------------------------------------------------------------
# Job title detection
# ---------------------------------------------------------------------------

_ROLE_WORD_RE = re.compile(
    r"\b(?:engineer|manager|director|lead|senior|staff|principal|architect|"
    r"developer|analyst|scientist|designer|head|vp|vice president|coordinator|"
    r"administrator|specialist|consultant|strategist)\b",
    re.IGNORECASE,
)

_TITLE_LABEL_PATTERNS: list[re.Pattern] = [
    re.compile(r"job title:[ \t]*([^\n]+)", re.IGNORECASE),
    re.compile(r"position:[ \t]*([^\n]+)", re.IGNORECASE),
    re.compile(r"role:[ \t]*([^\n]+)", re.IGNORECASE),
    re.compile(r"title:[ \t]*([^\n]+)", re.IGNORECASE),
    re.compile(r"hiring for:[ \t]*([^\n]+)", re.IGNORECASE),
    re.compile(r"we are hiring[^:\n]*:[ \t]*([^\n]+)", re.IGNORECASE),
]

_TITLE_SCAN_LINES = 5


def extract_job_title(job_description: str) -> str:
    """Find the role title: an explicit label, else the best of the first lines.

    Candidate lines must contain a role word; shorter, earlier, heading-styled
    lines score higher. Returns '' when nothing qualifies.
    """
    for pattern in _TITLE_LABEL_PATTERNS:
        match = pattern.search(job_description)
        if match and match.group(1).strip():
            return match.group(1).strip()

    lines = [line.strip() for line in job_description.split("\n") if line.strip()]
    scan_limit = min(len(lines), _TITLE_SCAN_LINES)
    best_line, best_score = "", 0.0

    for i, line in enumerate(lines[:scan_limit]):
        cleaned = re.sub(r"<[^>]+>", "", _MARKDOWN_HEADER_RE.sub("", line).strip("*")).strip()
        if not _ROLE_WORD_RE.search(cleaned):
            continue

        score = 3.0
        if len(cleaned) < 80:
            score += 2
        if len(cleaned) < 50:
            score += 1
        if not cleaned.endswith(".") and len(cleaned.split()) <= 10:
            score += 1
        score += (scan_limit - i) * 0.5
        if _MARKDOWN_HEADER_RE.match(line) or line.startswith("**"):
            score += 1

        # strict > keeps the earliest line on ties
        if score > best_score:
            best_line, best_score = cleaned, score

    return best_line


# ---------------------------------------------------------------------------
# Experience and team-size requirements
# ---------------------------------------------------------------------------

_JD_YEARS_PATTERNS: list[re.Pattern] = [
    re.compile(r"(\d+)\+?\s*(?:years?|yrs?)\s*(?:of\s+)?(?:\w+\s+){0,3}?(?:experience|exp\b)", re.IGNORECASE),
    re.compile(r"(\d+)\s*-\s*\d+\s*(?:years?|yrs?)", re.IGNORECASE),
    re.compile(r"minimum\s+(?:of\s+)?(\d+)\s*(?:years?|yrs?)", re.IGNORECASE),
]

_JD_TEAM_PATTERNS: list[re.Pattern] = [
    re.compile(r"(?:team\s+of|manage|lead)\s+(\d+)", re.IGNORECASE),
    re.compile(r"(\d+)\+?\s*(?:engineers?|developers?|reports?)", re.IGNORECASE),
]

_RESUME_TEAM_RE = re.compile(
    r"(?:team\s+of|scaling\s+to|led|managed)\s+(\d+)\s*(?:engineers?|people|members|reports)",
    re.IGNORECASE,
)


def _first_int(patterns: list[re.Pattern], text: str) -> int | None:
    for pattern in patterns:
        match = pattern.search(text)
        if match:
            return int(match.group(1))
    return None


def extract_required_years(job_description: str) -> int | None:
    """Years of experience the JD asks for ("8+ years", "5-7 years", "minimum 3 years")."""
    return _first_int(_JD_YEARS_PATTERNS, job_description)


def extract_required_team_size(job_description: str) -> int | None:
    """Team size the JD mentions ("team of 6", "manage 10+ engineers")."""
    return _first_int(_JD_TEAM_PATTERNS, job_description)


def extract_team_size(team_size: str, highlights: list[str]) -> int | None:
    """Team size from an explicit field, else from experience highlights."""
    if team_size:
        match = re.search(r"(\d+)", team_size)
        if match:
            return int(match.group(1))
    for highlight in highlights:
        match = _RESUME_TEAM_RE.search(highlight)
        if match:
            return int(match.group(1))
    return None
