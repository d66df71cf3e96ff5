import pytest

from services.keyword_matcher import count_keyword_occurrences, find_keyword_spans, keyword_in_text


def test_single_token_respects_word_boundaries():
    assert not keyword_in_text("going", "go")
    assert keyword_in_text("I will go there", "go")
    assert not keyword_in_text("Javascript developer", "java")


def test_phrase_with_separators():
    assert keyword_in_text("machine-learning role", "machine learning")
    assert keyword_in_text("machine, learning", "machine learning")
    assert keyword_in_text("machine / learning", "machine learning")
    assert keyword_in_text("Machine\n  Learning engineer", "machine learning")


def test_phrase_needs_boundaries_at_both_ends():
    assert not keyword_in_text("machine learnings", "machine learning")
    assert not keyword_in_text("submachine learning", "machine learning")


def test_phrase_tokens_must_be_separated():
    assert not keyword_in_text("machinelearning", "machine learning")


def test_case_insensitive():
    assert keyword_in_text("Senior PYTHON engineer", "Python")


@pytest.mark.parametrize("keyword", ["c++", "c#", ".net", "node.js", "ci/cd"])
def test_special_characters_are_literal(keyword):
    text = f"Worked with {keyword.upper()}, daily"
    assert keyword_in_text(text, keyword)


def test_special_characters_not_treated_as_pattern():
    assert not keyword_in_text("nodexjs services", "node.js")
    assert not keyword_in_text("cc services", "c+")


def test_empty_inputs_return_false():
    assert not keyword_in_text("anything", "")
    assert not keyword_in_text("anything", "   ")
    assert not keyword_in_text("", "python")


def test_count_occurrences():
    text = "Python scripts, python services and pythonic code. PYTHON!"
    assert count_keyword_occurrences(text, "python") == 3
    assert count_keyword_occurrences(text, "rust") == 0


def test_find_spans_index_into_lowercased_text():
    text = "Deep learning and Machine-Learning"
    spans = find_keyword_spans(text, "machine learning")
    assert spans == [(18, 34)]
    assert text.lower()[18:34] == "machine-learning"
