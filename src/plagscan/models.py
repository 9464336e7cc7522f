"""Core PlagScan data models."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Document:
    """Plain text already extracted from its source format."""

    text: str
    name: str | None = None


@dataclass(frozen=True, slots=True)
class Candidate:
    """A text to compare against, as returned by a search step."""

    identifier: str
    title: str
    text: str
    url: str | None = None


@dataclass(frozen=True, slots=True)
class ScoreResult:
    """Score of one candidate, never mutated after creation."""

    candidate_id: str
    keywords: str | None
    score: float
    title: str | None = None
    url: str | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "source": self.url or self.candidate_id,
            "title": self.title,
            "keywords": self.keywords,
            "plagiarism_score": self.score,
        }
