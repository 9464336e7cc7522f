"""Tests for the Rabin-Karp rolling hash."""

from __future__ import annotations

import pytest

from plagscan.errors import InvalidParameter
from plagscan.fingerprint.rolling import (
    HashParams,
    RollingHash,
    horner_hash,
    iter_window_hashes,
)


class TestHashParams:
    """Test HashParams validation."""

    def test_defaults(self) -> None:
        """Should use the historical Rabin-Karp defaults."""
        params = HashParams()

        assert params.k == 10
        assert params.base == 256
        assert params.modulus == 1_000_003

    @pytest.mark.parametrize(
        "kwargs",
        [{"k": 0}, {"k": -3}, {"base": 1}, {"base": 0}, {"modulus": 1}, {"modulus": -7}],
    )
    def test_invalid_values(self, kwargs: dict) -> None:
        """Should reject out-of-range parameters."""
        with pytest.raises(InvalidParameter):
            HashParams(**kwargs)

    def test_invalid_parameter_is_value_error(self) -> None:
        """InvalidParameter can be caught as a ValueError."""
        with pytest.raises(ValueError):
            HashParams(k=0)

    def test_leading_weight_matches_repeated_multiplication(self) -> None:
        """Fast exponentiation agrees with naive repeated multiplication."""
        params = HashParams(k=17, base=256, modulus=101)
        naive = 1
        for _ in range(params.k - 1):
            naive = (naive * params.base) % params.modulus

        assert params.leading_weight == naive

    def test_leading_weight_k_one(self) -> None:
        """A single-character window has weight 1."""
        assert HashParams(k=1, base=256, modulus=101).leading_weight == 1


class TestHornerHash:
    """Test horner_hash function."""

    def test_worked_example(self) -> None:
        """Hash of 'abcd' with base 256 mod 101."""
        params = HashParams(k=4, base=256, modulus=101)

        assert horner_hash("abcd", params) == 11

    def test_collision_in_small_modulus(self) -> None:
        """'dabc' and 'xxxx' collide mod 101."""
        params = HashParams(k=4, base=256, modulus=101)

        assert horner_hash("dabc", params) == horner_hash("xxxx", params) == 85


class TestRollingHash:
    """Test RollingHash class."""

    def test_initial_window_length_must_match(self) -> None:
        """Should refuse a window of the wrong length."""
        with pytest.raises(InvalidParameter):
            RollingHash(HashParams(k=4), "abc")

    @pytest.mark.parametrize("modulus", [2, 101, 1_000_003])
    def test_rolling_equals_recomputation(self, modulus: int) -> None:
        """Every rolled hash equals Horner's scheme over the same window."""
        params = HashParams(k=5, base=256, modulus=modulus)
        text = "the quick brown fox jumps over the lazy dog, đạo văn!"

        for start, (value, window) in enumerate(iter_window_hashes(text, params)):
            assert window == text[start : start + params.k]
            assert value == horner_hash(window, params)

    def test_values_stay_in_range(self) -> None:
        """Rolled values never leave [0, modulus)."""
        params = HashParams(k=3, base=1000, modulus=7)
        rolling = RollingHash(params, "zzz")
        text = "zzz" + "\x00a\uffff" * 20

        for start in range(1, len(text) - params.k + 1):
            value = rolling.roll(text[start - 1], text[start + params.k - 1])
            assert 0 <= value < params.modulus


class TestIterWindowHashes:
    """Test iter_window_hashes function."""

    def test_short_text_yields_nothing(self) -> None:
        """Text shorter than k has no windows."""
        assert list(iter_window_hashes("abc", HashParams(k=4))) == []

    def test_window_count(self) -> None:
        """A text of length n has n - k + 1 windows."""
        windows = list(iter_window_hashes("abcdxxxx", HashParams(k=4, modulus=101)))

        assert [window for _, window in windows] == ["abcd", "bcdx", "cdxx", "dxxx", "xxxx"]
