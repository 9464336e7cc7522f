"""Application configuration defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import Mapping

from plagscan.errors import InvalidParameter
from plagscan.fingerprint.rolling import (
    DEFAULT_BASE,
    DEFAULT_MODULUS,
    DEFAULT_NGRAM_LENGTH,
    HashParams,
)

ENV_PREFIX = "PLAGSCAN_"


@dataclass(slots=True)
class AppConfig:
    ngram_length: int = DEFAULT_NGRAM_LENGTH
    base: int = DEFAULT_BASE
    modulus: int = DEFAULT_MODULUS
    mode: str = "verified"
    language: str = "vi"
    search_limit: int = 5
    result_limit: int = 5
    keyword_top_k: int = 3
    keyword_max_length: int = 100
    keyword_min_token_length: int = 4
    request_timeout: float = 10.0
    user_agent: str = "PlagScan/0.1 (+https://github.com/plagscan/plagscan)"

    def hash_params(self) -> HashParams:
        return HashParams(k=self.ngram_length, base=self.base, modulus=self.modulus)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "AppConfig":
        """Build a config where ``PLAGSCAN_<FIELD>`` variables override defaults."""
        environ = os.environ if environ is None else environ
        overrides: dict[str, object] = {}
        for item in fields(cls):
            raw = environ.get(ENV_PREFIX + item.name.upper())
            if raw is None or raw == "":
                continue
            default = item.default
            try:
                if isinstance(default, int):
                    overrides[item.name] = int(raw)
                elif isinstance(default, float):
                    overrides[item.name] = float(raw)
                else:
                    overrides[item.name] = raw
            except ValueError as exc:
                raise InvalidParameter(
                    f"{ENV_PREFIX}{item.name.upper()} must be a {type(default).__name__}, got {raw!r}"
                ) from exc
        return cls(**overrides)
