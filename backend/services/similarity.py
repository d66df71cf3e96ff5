"""TF-IDF term weighting used to rank filler keywords from a job description."""

import logging
from collections.abc import Callable

from sklearn.feature_extraction.text import TfidfVectorizer

logger = logging.getLogger(__name__)

# Generic JD prose: terms that also appear here get a lower IDF, so
# distinctive terms in the input stand out.
REFERENCE_CORPUS = [
    "the candidate should have experience and skills in relevant areas",
    "looking for a professional with strong background and qualifications",
    "requirements include working with teams and delivering results",
    "we offer competitive salary benefits and a great culture for our people",
]


def tfidf_term_weights(text: str, tokenizer: Callable[[str], list[str]]) -> dict[str, float]:
    """Weight each token of ``text`` by TF-IDF against the reference corpus.

    ``tokenizer`` must be the same tokenizer used to produce candidate
    keywords so that weights line up with them. Returns {} for empty input.
    """
    if not text.strip():
        return {}

    vectorizer = TfidfVectorizer(
        tokenizer=tokenizer,
        token_pattern=None,
        lowercase=False,
        sublinear_tf=True,
    )
    try:
        tfidf_matrix = vectorizer.fit_transform([text] + REFERENCE_CORPUS)
    except ValueError:
        logger.debug("No TF-IDF vocabulary for text of length %d", len(text))
        return {}

    feature_names = vectorizer.get_feature_names_out()
    scores = tfidf_matrix[0].toarray().flatten()
    return {
        str(feature_names[i]): float(scores[i])
        for i in scores.nonzero()[0]
    }
