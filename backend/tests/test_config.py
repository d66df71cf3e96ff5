import pytest
from pydantic import ValidationError

from config import Settings


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.scoring_scheme == "current"
    assert settings.keyword_count == 0
    assert settings.fuzzy_match_threshold == 90
    assert settings.stuffing_threshold == 5


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("SCORING_SCHEME", "legacy")
    monkeypatch.setenv("KEYWORD_COUNT", "25")
    settings = Settings(_env_file=None)
    assert settings.scoring_scheme == "legacy"
    assert settings.keyword_count == 25


def test_unknown_scheme_rejected(monkeypatch):
    monkeypatch.setenv("SCORING_SCHEME", "v3")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)
