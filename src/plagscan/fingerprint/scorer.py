"""Coverage scoring of candidate texts against a reference fingerprint."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional, Sequence

from plagscan.fingerprint.builder import Fingerprint
from plagscan.fingerprint.rolling import iter_window_hashes
from plagscan.models import ScoreResult
from plagscan.utils.text import normalize

LOGGER = logging.getLogger(__name__)


def score(fingerprint: Fingerprint, candidate_text: str) -> float:
    """Fraction of the candidate's k-grams found in the reference fingerprint.

    The ratio is asymmetric: the reference is treated as ground truth and the
    denominator is the candidate's window count. Candidates shorter than ``k``
    after normalization score ``0.0``.
    """
    normalized = normalize(candidate_text)
    total = len(normalized) - fingerprint.k + 1
    if total <= 0:
        return 0.0
    if fingerprint.is_empty:
        return 0.0

    matches = 0
    for value, window in iter_window_hashes(normalized, fingerprint.params):
        if fingerprint.matches(value, window):
            matches += 1
    return matches / total


def score_many(
    fingerprint: Fingerprint,
    candidates: Sequence[str],
    *,
    max_workers: Optional[int] = None,
    cancel_event: Optional[threading.Event] = None,
) -> List[Optional[float]]:
    """Score many candidate texts against one fingerprint in parallel.

    Each candidate writes only its own slot of the returned list. Once
    ``cancel_event`` is set, candidates that have not started yet are skipped
    and their slot stays ``None``.
    """
    results: List[Optional[float]] = [None] * len(candidates)
    if not candidates:
        return results

    def _work(index: int) -> None:
        if cancel_event is not None and cancel_event.is_set():
            return
        results[index] = score(fingerprint, candidates[index])

    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        futures = [pool.submit(_work, index) for index in range(len(candidates))]
        for future in futures:
            future.result()

    skipped = sum(1 for value in results if value is None)
    if skipped:
        LOGGER.info("Scoring cancelled, %d of %d candidates skipped", skipped, len(candidates))
    return results


def rank_results(results: Iterable[ScoreResult], limit: Optional[int] = None) -> List[ScoreResult]:
    """Sort results by descending score, keeping input order for ties."""
    ranked = sorted(results, key=lambda result: result.score, reverse=True)
    if limit is not None:
        ranked = ranked[: max(limit, 0)]
    return ranked
