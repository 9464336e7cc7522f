"""Plagiarism check pipeline: keywords, search, fetch, score and rank."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from plagscan.config import AppConfig
from plagscan.errors import SourceError
from plagscan.fingerprint import build_fingerprint_with, rank_results, score, score_many
from plagscan.keywords import extract_keywords_with_fallback
from plagscan.models import Candidate, ScoreResult
from plagscan.sources.wikipedia import WikipediaClient, scrape_text

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class CheckReport:
    keywords: str
    results: List[ScoreResult] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {
            "keywords": self.keywords,
            "results": [result.to_dict() for result in self.results],
        }


class PlagiarismChecker:
    """Scores a submitted text against candidate sources.

    Each source is fingerprinted as the reference and the submitted text is
    scored against it, so a score is the share of the submission covered by
    that source.
    """

    def __init__(self, config: AppConfig | None = None, client: WikipediaClient | None = None) -> None:
        self.config = config or AppConfig()
        self.params = self.config.hash_params()
        self.client = client or WikipediaClient(
            self.config.language,
            timeout=self.config.request_timeout,
            user_agent=self.config.user_agent,
        )

    def resolve_keywords(self, text: str, keywords: str | None = None) -> str:
        """Caller keywords win; otherwise they are extracted from the text."""
        if keywords and keywords.strip():
            return keywords.strip()
        return extract_keywords_with_fallback(
            text,
            top_k=self.config.keyword_top_k,
            max_length=self.config.keyword_max_length,
            min_token_length=self.config.keyword_min_token_length,
        )

    def fetch_candidates(self, keywords: str) -> List[Candidate]:
        """Search Wikipedia and download the text of each hit.

        Articles that fail to download are logged and skipped.
        """
        hits = self.client.search(keywords, limit=self.config.search_limit)
        candidates: List[Candidate] = []
        for hit in hits:
            try:
                text = self.client.fetch_article_text(hit.pageid)
            except SourceError as exc:
                LOGGER.error("Failed to fetch content of %s: %s", hit.title, exc)
                continue
            if not text:
                LOGGER.debug("Page %s has no text, skipping", hit.title)
                continue
            candidates.append(
                Candidate(identifier=str(hit.pageid), title=hit.title, text=text, url=hit.url)
            )
        return candidates

    def score_candidates(
        self, text: str, candidates: Sequence[Candidate], keywords: str | None = None
    ) -> List[ScoreResult]:
        """Score ``text`` against each candidate and rank by descending score."""
        results = []
        for candidate in candidates:
            fingerprint = build_fingerprint_with(candidate.text, self.params, self.config.mode)
            results.append(
                ScoreResult(
                    candidate_id=candidate.identifier,
                    keywords=keywords,
                    score=score(fingerprint, text),
                    title=candidate.title,
                    url=candidate.url,
                )
            )
        return rank_results(results, limit=self.config.result_limit)

    def check(self, text: str, keywords: str | None = None) -> CheckReport:
        """Run the full Wikipedia check for ``text``."""
        query = self.resolve_keywords(text, keywords)
        if not query:
            LOGGER.info("No keywords could be derived from the text")
            return CheckReport(keywords="")
        LOGGER.info("Searching Wikipedia (%s) for %r", self.client.language, query)
        candidates = self.fetch_candidates(query)
        return CheckReport(keywords=query, results=self.score_candidates(text, candidates, query))

    def check_urls(self, text: str, urls: Sequence[str]) -> CheckReport:
        """Score ``text`` against arbitrary web pages instead of a search."""
        candidates = []
        for url in urls:
            page_text = scrape_text(url, timeout=self.config.request_timeout)
            if page_text:
                candidates.append(Candidate(identifier=url, title=url, text=page_text, url=url))
        return CheckReport(keywords="", results=self.score_candidates(text, candidates))

    def rank_against_reference(
        self,
        reference: str,
        candidates: Sequence[Candidate],
        *,
        cancel_event: Optional[threading.Event] = None,
    ) -> List[ScoreResult]:
        """Score many candidates against one reference text.

        The reference is fingerprinted once and shared by all scoring threads.
        Candidates skipped by cancellation are left out of the result.
        """
        fingerprint = build_fingerprint_with(reference, self.params, self.config.mode)
        scores = score_many(
            fingerprint, [candidate.text for candidate in candidates], cancel_event=cancel_event
        )
        results = [
            ScoreResult(
                candidate_id=candidate.identifier,
                keywords=None,
                score=value,
                title=candidate.title,
                url=candidate.url,
            )
            for candidate, value in zip(candidates, scores)
            if value is not None
        ]
        return rank_results(results)
