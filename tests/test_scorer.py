"""Tests for coverage scoring."""

from __future__ import annotations

import threading

import pytest

from plagscan.fingerprint import (
    FingerprintMode,
    build_fingerprint,
    rank_results,
    score,
    score_many,
)
from plagscan.models import ScoreResult

REFERENCE = (
    "Rabin-Karp uses a rolling hash to find any one of a set of pattern "
    "strings in a text. It was created by Richard Karp and Michael Rabin."
)


class TestScore:
    """Test score function."""

    def test_worked_example_verified(self) -> None:
        """One of five windows of 'abcdxxxx' matches 'abcdabcd'."""
        fingerprint = build_fingerprint(
            "abcdabcd", k=4, base=256, modulus=101, mode=FingerprintMode.VERIFIED
        )

        assert score(fingerprint, "abcdxxxx") == pytest.approx(0.2)

    def test_worked_example_fast_counts_collision(self) -> None:
        """Fast mode also counts 'xxxx', which collides with 'dabc' mod 101."""
        fingerprint = build_fingerprint(
            "abcdabcd", k=4, base=256, modulus=101, mode=FingerprintMode.FAST
        )

        assert score(fingerprint, "abcdxxxx") == pytest.approx(0.4)

    @pytest.mark.parametrize("mode", list(FingerprintMode))
    def test_self_similarity(self, mode: FingerprintMode) -> None:
        """A text is fully covered by its own fingerprint."""
        assert score(build_fingerprint(REFERENCE, mode=mode), REFERENCE) == 1.0

    @pytest.mark.parametrize("mode", list(FingerprintMode))
    def test_no_overlap(self, mode: FingerprintMode) -> None:
        """Texts sharing no k-gram score zero."""
        fingerprint = build_fingerprint("aaaaaaaaaaaa", k=4, mode=mode)

        assert score(fingerprint, "bbbbbbbbbbbb") == 0.0

    def test_normalization_invariance(self) -> None:
        """Formatting differences do not change the score."""
        first = score(build_fingerprint("Hello   World", k=3), "hello world")
        second = score(build_fingerprint("hello world", k=3), "hello   World")

        assert first == second == 1.0

    @pytest.mark.parametrize("candidate", ["", "   ", "abc", "Ab\n\t C"])
    def test_short_candidate_scores_zero(self, candidate: str) -> None:
        """Candidates shorter than k score exactly 0.0."""
        fingerprint = build_fingerprint(REFERENCE, k=10)

        assert score(fingerprint, candidate) == 0.0

    def test_empty_fingerprint_scores_zero(self) -> None:
        """Nothing is covered by an empty reference."""
        fingerprint = build_fingerprint("tiny", k=10)

        assert score(fingerprint, REFERENCE) == 0.0

    def test_coverage_is_asymmetric(self) -> None:
        """The score is the candidate's share covered by the reference."""
        long_text = "abcdefghij" + "0123456789"
        short_text = "abcdefghij"

        assert score(build_fingerprint(long_text, k=4), short_text) == 1.0
        assert score(build_fingerprint(short_text, k=4), long_text) == pytest.approx(7 / 17)

    def test_verified_never_exceeds_fast(self) -> None:
        """Verification only removes collisions."""
        reference = "the rain in spain stays mainly in the plain"
        for candidate in ["plain rain in spain", "zzzz qqqq the rain", "mainly plain"]:
            for modulus in (2, 7, 101, 1_000_003):
                fast = score(build_fingerprint(reference, k=3, modulus=modulus, mode="fast"), candidate)
                verified = score(
                    build_fingerprint(reference, k=3, modulus=modulus, mode="verified"), candidate
                )
                assert verified <= fast

    def test_score_in_unit_interval(self) -> None:
        """Scores stay within [0, 1]."""
        fingerprint = build_fingerprint(REFERENCE, k=5, modulus=3, mode="fast")

        assert 0.0 <= score(fingerprint, "completely different words here") <= 1.0


class TestScoreMany:
    """Test score_many function."""

    def test_matches_sequential_scoring(self) -> None:
        """Parallel scores equal one-by-one scores, in input order."""
        fingerprint = build_fingerprint(REFERENCE, k=6)
        candidates = [REFERENCE, "nothing in common at all!!", REFERENCE[:40], "abc"]

        results = score_many(fingerprint, candidates, max_workers=3)

        assert results == [score(fingerprint, text) for text in candidates]

    def test_empty_candidates(self) -> None:
        """No candidates, no scores."""
        assert score_many(build_fingerprint(REFERENCE), []) == []

    def test_cancelled_before_start(self) -> None:
        """A set cancel event leaves every slot empty."""
        cancel = threading.Event()
        cancel.set()

        results = score_many(build_fingerprint(REFERENCE), [REFERENCE, REFERENCE], cancel_event=cancel)

        assert results == [None, None]

    def test_cancel_keeps_finished_results(self) -> None:
        """Cancelling midway never corrupts slots that were already filled."""
        fingerprint = build_fingerprint(REFERENCE, k=6)
        cancel = threading.Event()

        class CancellingText(str):
            """Sets the cancel event as soon as it is normalized."""

            def lower(self) -> str:  # type: ignore[override]
                cancel.set()
                return str.lower(self)

        candidates = [REFERENCE, CancellingText(REFERENCE)] + [REFERENCE] * 5

        results = score_many(fingerprint, candidates, max_workers=1, cancel_event=cancel)

        assert results[0] == 1.0
        assert results[1] == 1.0
        assert results[2:] == [None] * 5


class TestRankResults:
    """Test rank_results function."""

    def _result(self, name: str, value: float) -> ScoreResult:
        return ScoreResult(candidate_id=name, keywords=None, score=value)

    def test_sorts_descending(self) -> None:
        """Highest score first."""
        ranked = rank_results([self._result("a", 0.1), self._result("b", 0.9), self._result("c", 0.5)])

        assert [r.candidate_id for r in ranked] == ["b", "c", "a"]

    def test_ties_keep_input_order(self) -> None:
        """Equal scores stay in input order."""
        ranked = rank_results([self._result("a", 0.5), self._result("b", 0.5)])

        assert [r.candidate_id for r in ranked] == ["a", "b"]

    def test_limit(self) -> None:
        """Should truncate to the limit."""
        ranked = rank_results([self._result(str(i), i / 10) for i in range(10)], limit=3)

        assert [r.candidate_id for r in ranked] == ["9", "8", "7"]
