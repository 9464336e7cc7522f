"""Frequency-ranked keyword phrases used as search queries."""

from __future__ import annotations

import logging
from collections import Counter
from typing import List

from plagscan.errors import InvalidParameter
from plagscan.utils.text import normalize, tokenize

LOGGER = logging.getLogger(__name__)

DEFAULT_MIN_TOKEN_LENGTH = 3
# Word count of the last-resort query built from the raw text.
RAW_FALLBACK_WORDS = 5


def _phrases(tokens: List[str], n: int) -> List[str]:
    return [" ".join(tokens[i : i + n]) for i in range(len(tokens) - n + 1)]


def extract_keywords(
    text: str,
    n: int = 2,
    top_k: int = 3,
    max_length: int = 100,
    *,
    min_token_length: int = DEFAULT_MIN_TOKEN_LENGTH,
) -> str:
    """Return the ``top_k`` most frequent ``n``-word phrases of ``text``.

    Tokens shorter than ``min_token_length`` are dropped before phrases are
    formed. Ties keep first-occurrence order. The joined result is cut to
    ``max_length`` characters; an empty string means no phrase could form.
    """
    if n < 1:
        raise InvalidParameter(f"n must be >= 1, got {n}")
    if top_k < 0 or max_length < 0:
        raise InvalidParameter("top_k and max_length must be non-negative")

    tokens = [token for token in tokenize(text) if len(token) >= min_token_length]
    if len(tokens) < n:
        return ""

    # Counter preserves insertion order and sorted() is stable.
    counts = Counter(_phrases(tokens, n))
    ranked = sorted(counts, key=lambda phrase: counts[phrase], reverse=True)
    return " ".join(ranked[:top_k])[:max_length]


def extract_keywords_with_fallback(
    text: str,
    n: int = 2,
    top_k: int = 3,
    max_length: int = 100,
    *,
    min_token_length: int = DEFAULT_MIN_TOKEN_LENGTH,
) -> str:
    """Like :func:`extract_keywords`, retrying with single words and then raw text.

    Only a blank input produces an empty query.
    """
    keywords = extract_keywords(
        text, n=n, top_k=top_k, max_length=max_length, min_token_length=min_token_length
    )
    if keywords:
        return keywords

    if n != 1:
        LOGGER.debug("No %d-word phrase found, retrying with single words", n)
        keywords = extract_keywords(
            text, n=1, top_k=top_k, max_length=max_length, min_token_length=min_token_length
        )
        if keywords:
            return keywords

    LOGGER.debug("No keyword found, using the leading words of the text")
    return " ".join(normalize(text).split(" ")[:RAW_FALLBACK_WORDS])[:max_length]
