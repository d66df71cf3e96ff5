import importlib.util
import json
from pathlib import Path

import pytest
import yaml

from conftest import SAMPLE_JD
from models.schemas import ProposedChange

SCRIPT = Path(__file__).resolve().parents[2] / "scripts" / "score_resume.py"


@pytest.fixture(scope="module")
def score_resume():
    module_spec = importlib.util.spec_from_file_location("score_resume", SCRIPT)
    module = importlib.util.module_from_spec(module_spec)
    module_spec.loader.exec_module(module)
    return module


@pytest.fixture
def inputs(tmp_path, sample_resume_data):
    jd = tmp_path / "jd.txt"
    jd.write_text(SAMPLE_JD, encoding="utf-8")
    resume = tmp_path / "resume.yaml"
    resume.write_text(yaml.safe_dump(sample_resume_data.to_payload()), encoding="utf-8")
    changes = tmp_path / "changes.json"
    changes.write_text(
        json.dumps(
            [
                {
                    "section": "experience.acme.bullet2",
                    "original": "Responsible for on-call rotation",
                    "modified": "Automated on-call rotation with Terraform and observability dashboards",
                    "keywordsAdded": ["terraform", "observability"],
                    "impactPoints": 50,
                }
            ]
        ),
        encoding="utf-8",
    )
    return jd, resume, changes


def test_apply_changes_replaces_original(score_resume):
    change = ProposedChange(section="summary", original="Built things", modified="Built Kafka pipelines")
    assert score_resume.apply_changes("Summary\nBuilt things\n", [change]) == "Summary\nBuilt Kafka pipelines\n"


def test_apply_changes_appends_when_original_missing(score_resume):
    change = ProposedChange(section="skills.cloud", original="GCP", modified="AWS, Terraform")
    assert score_resume.apply_changes("Python", [change]) == "Python\nAWS, Terraform"


def test_apply_changes_skips_empty_modification(score_resume):
    change = ProposedChange(section="summary", original="missing")
    assert score_resume.apply_changes("Python", [change]) == "Python"


def test_load_structured_reads_yaml_and_json(score_resume, inputs):
    _, resume, changes = inputs
    assert score_resume.load_structured(resume)["name"] == "Alex Kim"
    assert score_resume.load_structured(changes)[0]["impactPoints"] == 50


@pytest.mark.scoring
def test_main_without_changes(score_resume, inputs):
    jd, resume, _ = inputs
    report = score_resume.main(jd, resume)
    assert {"currentScore", "assessment", "highlights", "possibleMax"} <= set(report)
    assert "proposedChanges" not in report
    assert report["possibleMax"] == pytest.approx(report["currentScore"]["total"], abs=0.05)
    assert len(report["highlights"]) == 3
    json.dumps(report)


@pytest.mark.scoring
def test_main_normalizes_changes_to_ceiling(score_resume, inputs):
    jd, resume, changes = inputs
    report = score_resume.main(jd, resume, ceiling=80, changes_path=changes)
    assert {"currentScore", "optimizedScore", "proposedChanges", "possibleMax"} <= set(report)
    assert report["possibleMax"] <= 80

    current = report["currentScore"]["total"]
    optimized = report["optimizedScore"]["total"]
    budget = max(0.0, min(80.0, optimized) - current)
    assert sum(c["impactPoints"] for c in report["proposedChanges"]) <= budget + 0.01
    assert report["proposedChanges"][0]["keywordsAdded"] == ["terraform", "observability"]
    json.dumps(report)
