"""Rabin-Karp polynomial rolling hash.

Every value produced here lies in ``[0, modulus)``. Callers never do modular
arithmetic themselves; they go through :class:`RollingHash`, which keeps the
running value reduced after each subtraction.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Tuple

from plagscan.errors import InvalidParameter

DEFAULT_NGRAM_LENGTH = 10
DEFAULT_BASE = 256
DEFAULT_MODULUS = 1_000_003


@dataclass(frozen=True, slots=True)
class HashParams:
    """The ``(k, base, modulus)`` triple shared by fingerprinting and scoring."""

    k: int = DEFAULT_NGRAM_LENGTH
    base: int = DEFAULT_BASE
    modulus: int = DEFAULT_MODULUS

    def __post_init__(self) -> None:
        if self.k < 1:
            raise InvalidParameter(f"k must be >= 1, got {self.k}")
        if self.base <= 1:
            raise InvalidParameter(f"base must be > 1, got {self.base}")
        if self.modulus <= 1:
            raise InvalidParameter(f"modulus must be > 1, got {self.modulus}")

    @property
    def leading_weight(self) -> int:
        """Weight of the departing character, ``base^(k-1) mod modulus``."""
        return pow(self.base, self.k - 1, self.modulus)


def horner_hash(window: str, params: HashParams) -> int:
    """Hash a window from scratch with Horner's scheme."""
    value = 0
    for char in window:
        value = (value * params.base + ord(char)) % params.modulus
    return value


class RollingHash:
    """Hash of a sliding window of ``params.k`` characters."""

    __slots__ = ("params", "_weight", "_value")

    def __init__(self, params: HashParams, window: str) -> None:
        if len(window) != params.k:
            raise InvalidParameter(
                f"initial window must have length {params.k}, got {len(window)}"
            )
        self.params = params
        self._weight = params.leading_weight
        self._value = horner_hash(window, params)

    @property
    def value(self) -> int:
        return self._value

    def roll(self, outgoing: str, incoming: str) -> int:
        """Shift the window one character to the right and return the new hash."""
        modulus = self.params.modulus
        value = self._value - (ord(outgoing) * self._weight) % modulus
        if value < 0:
            value += modulus
        self._value = (value * self.params.base + ord(incoming)) % modulus
        return self._value


def iter_window_hashes(text: str, params: HashParams) -> Iterator[Tuple[int, str]]:
    """Yield ``(hash, window)`` for each k-length window of ``text`` in order.

    Yields nothing when the text is shorter than ``k``. ``text`` is used as
    given; normalize it beforehand.
    """
    k = params.k
    if len(text) < k:
        return
    rolling = RollingHash(params, text[:k])
    yield rolling.value, text[:k]
    for start in range(1, len(text) - k + 1):
        value = rolling.roll(text[start - 1], text[start + k - 1])
        yield value, text[start : start + k]
