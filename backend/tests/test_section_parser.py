from services.section_parser import (
    classify_section,
    extract_job_title,
    extract_required_team_size,
    extract_required_years,
    extract_team_size,
    parse_jd_sections,
)


MARKDOWN_JD = """## About Us
We are a small healthcare company.

## Requirements
- Python
- 5+ years of backend experience

## Nice to Have
- Rust
"""


def test_parse_markdown_sections():
    sections = parse_jd_sections(MARKDOWN_JD)
    assert [s.type for s in sections] == ["about", "required", "nice_to_have"]
    assert sections[1].header == "Requirements"
    assert "- Python" in sections[1].content
    assert sections[2].content == "- Rust"


def test_parse_colon_and_caps_headers():
    jd = "RESPONSIBILITIES\nBuild services\nPreferred Qualifications:\nKafka\n"
    sections = parse_jd_sections(jd)
    assert [s.type for s in sections] == ["responsibilities", "nice_to_have"]
    assert sections[1].content == "Kafka"


def test_fallback_inline_signals():
    jd = "Looking for engineers.\nYou must have Python experience\nBonus points for Rust"
    sections = parse_jd_sections(jd)
    assert [s.type for s in sections] == ["unknown", "required", "nice_to_have"]
    assert sections[2].content == "Bonus points for Rust"


def test_classify_section():
    assert classify_section("Preferred Qualifications") == "nice_to_have"
    assert classify_section("Minimum Qualifications") == "required"
    assert classify_section("Key Responsibilities") == "responsibilities"
    assert classify_section("Benefits") == "about"
    assert classify_section("Location") == "unknown"


def test_extract_job_title_from_label():
    assert extract_job_title("Job Title: Staff Data Engineer\nRemote") == "Staff Data Engineer"


def test_extract_job_title_from_first_lines():
    jd = "# Senior Backend Engineer\nWe build payment systems for small businesses."
    assert extract_job_title(jd) == "Senior Backend Engineer"


def test_extract_job_title_missing():
    assert extract_job_title("We build software.\nApply today.") == ""


def test_extract_required_years():
    assert extract_required_years("8+ years of software engineering experience") == 8
    assert extract_required_years("5-7 years in a similar role") == 5
    assert extract_required_years("A minimum of 3 years on call") == 3
    assert extract_required_years("No experience needed") is None


def test_extract_required_team_size():
    assert extract_required_team_size("You will lead a team of 6") == 6
    assert extract_required_team_size("Manage 10+ engineers") == 10
    assert extract_required_team_size("Individual contributor role") is None


def test_extract_team_size_from_resume():
    assert extract_team_size("13 engineers", []) == 13
    assert extract_team_size("", ["Led 5 engineers across two sites"]) == 5
    assert extract_team_size("", ["Wrote docs"]) is None
