"""Reference fingerprint construction."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, FrozenSet, Mapping, Set

from plagscan.errors import InvalidParameter
from plagscan.fingerprint.rolling import (
    DEFAULT_BASE,
    DEFAULT_MODULUS,
    DEFAULT_NGRAM_LENGTH,
    HashParams,
    iter_window_hashes,
)
from plagscan.utils.text import normalize

LOGGER = logging.getLogger(__name__)

_EMPTY_BUCKETS: Mapping[int, FrozenSet[str]] = MappingProxyType({})


class FingerprintMode(str, Enum):
    """How a fingerprint remembers the k-grams it has seen.

    FAST keeps only the hash of each window, so colliding k-grams merge and a
    scoring pass may count false positives. VERIFIED also keeps the literal
    k-grams per hash bucket and rejects collisions at scoring time.
    """

    FAST = "fast"
    VERIFIED = "verified"

    @classmethod
    def parse(cls, value: "FingerprintMode | str") -> "FingerprintMode":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError as exc:
            raise InvalidParameter(
                f"mode must be one of {[m.value for m in cls]}, got {value!r}"
            ) from exc


@dataclass(frozen=True, slots=True)
class Fingerprint:
    """Immutable set of k-gram hashes of one reference text."""

    params: HashParams
    mode: FingerprintMode
    hashes: FrozenSet[int] = frozenset()
    buckets: Mapping[int, FrozenSet[str]] = field(
        default_factory=lambda: _EMPTY_BUCKETS, compare=False
    )

    def __post_init__(self) -> None:
        mode = FingerprintMode.parse(self.mode)
        hashes = frozenset(self.hashes)
        out_of_range = [value for value in hashes if not 0 <= value < self.params.modulus]
        if out_of_range:
            raise InvalidParameter(
                f"hash values must lie in [0, {self.params.modulus}), got {sorted(out_of_range)[:5]}"
            )

        if mode is FingerprintMode.VERIFIED:
            if set(self.buckets) != hashes:
                raise InvalidParameter("verified fingerprint buckets must cover exactly its hashes")
            buckets = MappingProxyType(
                {value: frozenset(windows) for value, windows in self.buckets.items()}
            )
        elif self.buckets:
            raise InvalidParameter("fast fingerprints do not keep buckets")
        else:
            buckets = _EMPTY_BUCKETS

        object.__setattr__(self, "mode", mode)
        object.__setattr__(self, "hashes", hashes)
        object.__setattr__(self, "buckets", buckets)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Fingerprint):
            return NotImplemented
        return (
            self.params == other.params
            and self.mode == other.mode
            and self.hashes == other.hashes
            and dict(self.buckets) == dict(other.buckets)
        )

    def __hash__(self) -> int:
        return hash((self.params, self.mode, self.hashes))

    def __len__(self) -> int:
        return len(self.hashes)

    def __contains__(self, value: object) -> bool:
        return value in self.hashes

    @property
    def k(self) -> int:
        return self.params.k

    @property
    def is_empty(self) -> bool:
        return not self.hashes

    def matches(self, value: int, window: str) -> bool:
        """Return True when a candidate window is found in this fingerprint."""
        if value not in self.hashes:
            return False
        if self.mode is FingerprintMode.VERIFIED:
            return window in self.buckets.get(value, frozenset())
        return True


def build_fingerprint(
    text: str,
    k: int = DEFAULT_NGRAM_LENGTH,
    base: int = DEFAULT_BASE,
    modulus: int = DEFAULT_MODULUS,
    mode: FingerprintMode | str = FingerprintMode.VERIFIED,
) -> Fingerprint:
    """Fingerprint every k-gram of the normalized ``text``.

    Raises :class:`InvalidParameter` for ``k < 1``, ``base <= 1`` or
    ``modulus <= 1``. A text shorter than ``k`` after normalization yields an
    empty fingerprint.
    """
    params = HashParams(k=k, base=base, modulus=modulus)
    return build_fingerprint_with(text, params, mode)


def build_fingerprint_with(
    text: str, params: HashParams, mode: FingerprintMode | str = FingerprintMode.VERIFIED
) -> Fingerprint:
    """Same as :func:`build_fingerprint` with pre-validated parameters."""
    mode = FingerprintMode.parse(mode)
    normalized = normalize(text)

    if mode is FingerprintMode.FAST:
        hashes = frozenset(value for value, _ in iter_window_hashes(normalized, params))
        LOGGER.debug("Built fast fingerprint with %d hashes (k=%d)", len(hashes), params.k)
        return Fingerprint(params=params, mode=mode, hashes=hashes)

    collected: Dict[int, Set[str]] = {}
    for value, window in iter_window_hashes(normalized, params):
        collected.setdefault(value, set()).add(window)
    buckets = MappingProxyType(
        {value: frozenset(windows) for value, windows in collected.items()}
    )
    LOGGER.debug("Built verified fingerprint with %d hashes (k=%d)", len(buckets), params.k)
    return Fingerprint(params=params, mode=mode, hashes=frozenset(buckets), buckets=buckets)
