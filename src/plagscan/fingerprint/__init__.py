"""Rabin-Karp fingerprinting and coverage scoring."""

from plagscan.fingerprint.builder import (
    Fingerprint,
    FingerprintMode,
    build_fingerprint,
    build_fingerprint_with,
)
from plagscan.fingerprint.rolling import HashParams, RollingHash, horner_hash
from plagscan.fingerprint.scorer import rank_results, score, score_many

__all__ = [
    "Fingerprint",
    "FingerprintMode",
    "HashParams",
    "RollingHash",
    "build_fingerprint",
    "build_fingerprint_with",
    "horner_hash",
    "rank_results",
    "score",
    "score_many",
]
