"""Text helpers shared by the fingerprinting engine and the keyword extractor."""

from __future__ import annotations

import re
from typing import Iterable, List

_WHITESPACE_RE = re.compile(r"\s+")
# Runs of letters or digits, Unicode-aware (\w minus the underscore).
_TOKEN_RE = re.compile(r"[^\W_]+")


def normalize(text: str) -> str:
    """Lowercase, collapse whitespace runs to a single space and strip.

    Idempotent: ``normalize(normalize(t)) == normalize(t)``.
    """
    return _WHITESPACE_RE.sub(" ", text.lower()).strip()


def collapse_whitespace(text: str) -> str:
    """Collapse whitespace without changing case."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def tokenize(text: str) -> List[str]:
    """Split text on runs of non-letter/non-digit characters and casefold."""
    return _TOKEN_RE.findall(text.casefold())


def normalize_whitespace(lines: Iterable[str]) -> str:
    """Collapse whitespace and join lines."""
    return "\n".join(line.strip() for line in lines if line.strip())
