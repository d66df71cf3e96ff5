import math

import pytest

from services.sanitizer import round_half_up, sanitize_score_value, truncate


@pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf, None, "abc", object()])
def test_non_finite_returns_min(value):
    assert sanitize_score_value(value, 0, 45) == 0


def test_clamps_to_range():
    assert sanitize_score_value(-3, 0, 100) == 0
    assert sanitize_score_value(140, 0, 100) == 100
    assert sanitize_score_value(1e308 * 10, 5, 10) == 5


def test_in_range_value_unchanged():
    assert sanitize_score_value(47.63, 0, 100) == 47.63
    assert sanitize_score_value(0, 0, 10) == 0
    assert sanitize_score_value(10, 0, 10) == 10


def test_numeric_strings_are_coerced():
    assert sanitize_score_value("12.5", 0, 100) == 12.5


def test_idempotent():
    for value in (-5, 0, 3.3, 99.9, 250, math.nan):
        once = sanitize_score_value(value, 0, 100)
        assert sanitize_score_value(once, 0, 100) == once


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(3.2) == 3
    assert round_half_up(1.25, 1) == pytest.approx(1.3)
    assert round_half_up(70.2, 1) == pytest.approx(70.2)


def test_truncate_never_rounds_up():
    assert truncate(1.239) == pytest.approx(1.23)
    assert truncate(4.999, 2) == pytest.approx(4.99)
    assert truncate(2.0) == 2.0
