"""Literal keyword and phrase matching with word boundaries.

A boundary is any position whose neighbouring character is not alphanumeric,
so ``go`` never matches inside ``going`` and ``c++`` still matches in
``C++, Rust``. Phrase tokens may be separated by any run of whitespace,
hyphens, slashes or commas: ``machine learning`` matches
``machine-learning`` and ``machine, learning``. Keywords are compared as
literal text; characters such as ``+``, ``.`` and ``#`` carry no pattern
meaning.
"""

from collections.abc import Iterator

PHRASE_SEPARATORS = frozenset("-/,")


def _is_separator(char: str) -> bool:
    return char.isspace() or char in PHRASE_SEPARATORS


def _left_boundary(text: str, index: int) -> bool:
    return index == 0 or not text[index - 1].isalnum()


def _right_boundary(text: str, index: int) -> bool:
    return index >= len(text) or not text[index].isalnum()


def _match_rest(text: str, tokens: list[str], pos: int) -> int | None:
    """Match ``tokens`` after ``pos``, each preceded by one or more separators.

    Returns the end index of the phrase, or None. Tries every split of the
    separator run so a token that itself starts with a separator still matches.
    """
    if not tokens:
        return pos if _right_boundary(text, pos) else None

    run_end = pos
    while run_end < len(text) and _is_separator(text[run_end]):
        run_end += 1

    token = tokens[0]
    for start in range(pos + 1, run_end + 1):
        if text.startswith(token, start):
            end = _match_rest(text, tokens[1:], start + len(token))
            if end is not None:
                return end
    return None


def _iter_matches(text: str, tokens: list[str]) -> Iterator[tuple[int, int]]:
    """Yield non-overlapping ``(start, end)`` spans of the phrase in ``text``."""
    first = tokens[0]
    search_from = 0
    while True:
        start = text.find(first, search_from)
        if start == -1:
            return
        end = None
        if _left_boundary(text, start):
            end = _match_rest(text, tokens[1:], start + len(first))
        if end is None:
            search_from = start + 1
        else:
            yield start, end
            search_from = end


def _tokens(keyword: str) -> list[str]:
    return keyword.lower().split()


def keyword_in_text(text: str, keyword: str) -> bool:
    """True if ``keyword`` occurs in ``text`` (case-insensitive, boundary-aware)."""
    tokens = _tokens(keyword)
    if not tokens or not text:
        return False
    return next(_iter_matches(text.lower(), tokens), None) is not None


def find_keyword_spans(text: str, keyword: str) -> list[tuple[int, int]]:
    """Non-overlapping ``(start, end)`` spans of ``keyword``, indexed into ``text.lower()``."""
    tokens = _tokens(keyword)
    if not tokens or not text:
        return []
    return list(_iter_matches(text.lower(), tokens))


def count_keyword_occurrences(text: str, keyword: str) -> int:
    """Number of non-overlapping boundary-aware occurrences of ``keyword``."""
    tokens = _tokens(keyword)
    if not tokens or not text:
        return 0
    return sum(1 for _ in _iter_matches(text.lower(), tokens))
