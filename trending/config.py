from __future__ import annotations

import math
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .errors import ConfigurationError


ENV_KEYS = {
    "likes_bias": "TRENDING_LIKES_BIAS",
    "comments_bias": "TRENDING_COMMENTS_BIAS",
    "time_bias": "TRENDING_TIME_BIAS",
    "max_days_since_posted": "TRENDING_MAX_DAYS_SINCE_POSTED",
}


@dataclass(frozen=True)
class Biases:
    """Tunables for one ranking pass.

    likes_bias / comments_bias weight engagement, time_bias is an additive
    number of seconds in the decay denominator and max_days_since_posted is
    the eligibility window. A max_days_since_posted of 0 is valid and makes
    every item ineligible.
    """

    likes_bias: float
    comments_bias: float
    time_bias: int
    max_days_since_posted: int

    def validate(self) -> "Biases":
        for name in ("likes_bias", "comments_bias"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigurationError(f"trending.{name} must be a number", key=f"trending.{name}")
            if not math.isfinite(value) or value < 0:
                raise ConfigurationError(f"trending.{name} must be a finite number >= 0", key=f"trending.{name}")
        for name in ("time_bias", "max_days_since_posted"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"trending.{name} must be an integer", key=f"trending.{name}")
            if value < 0:
                raise ConfigurationError(f"trending.{name} must be >= 0", key=f"trending.{name}")
        return self


def _float(key: str, raw) -> float:
    try:
        return float(raw)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{key} is not a number: {raw!r}", key=key) from None


def _int(key: str, raw) -> int:
    if isinstance(raw, float):
        if not raw.is_integer():
            raise ConfigurationError(f"{key} is not an integer: {raw!r}", key=key)
        return int(raw)
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{key} is not an integer: {raw!r}", key=key) from None


def _build(raw: Mapping[str, object], label) -> Biases:
    return Biases(
        likes_bias=_float(label("likes_bias"), raw["likes_bias"]),
        comments_bias=_float(label("comments_bias"), raw["comments_bias"]),
        time_bias=_int(label("time_bias"), raw["time_bias"]),
        max_days_since_posted=_int(label("max_days_since_posted"), raw["max_days_since_posted"]),
    ).validate()


def biases_from_env(environ: Optional[Mapping[str, str]] = None) -> Biases:
    env = os.environ if environ is None else environ
    raw = {}
    for name, var in ENV_KEYS.items():
        value = (env.get(var) or "").strip()
        if not value:
            raise ConfigurationError(f"{var} is not set", key=var)
        raw[name] = value
    return _build(raw, lambda name: ENV_KEYS[name])


def biases_from_dict(d: Optional[Mapping[str, object]]) -> Biases:
    """Accepts either dotted keys (``trending.likes_bias``) or bare ones."""
    d = d or {}
    raw = {}
    for name in ENV_KEYS:
        if f"trending.{name}" in d:
            value = d[f"trending.{name}"]
        elif name in d:
            value = d[name]
        else:
            raise ConfigurationError(f"trending.{name} is not configured", key=f"trending.{name}")
        if value is None:
            raise ConfigurationError(f"trending.{name} is not configured", key=f"trending.{name}")
        raw[name] = value
    return _build(raw, lambda name: f"trending.{name}")


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except Exception:
        return default


def default_per_page() -> int:
    return max(1, _int_env("TRENDING_PER_PAGE", 10))


def max_per_page() -> int:
    return max(1, _int_env("TRENDING_MAX_PER_PAGE", 50))
