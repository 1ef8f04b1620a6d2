from __future__ import annotations

import math
import time
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Mapping, Optional, Tuple, Union

HOUR = 3600
DAY = HOUR * 24


@dataclass(frozen=True)
class Hourly:
    """Expire `offset` seconds after the beginning of the current hour."""
    offset: int


@dataclass(frozen=True)
class Daily:
    """Expire `offset` seconds after the beginning of the current (UTC) day."""
    offset: int


Expiration = Union[int, timedelta, Hourly, Daily, Tuple[str, int]]


def epoch() -> int:
    return int(time.time())


def _window(expiration: Any) -> Optional[Tuple[int, int]]:
    """
    Return (window_seconds, offset) for hourly/daily specs, None otherwise.
    """
    if isinstance(expiration, Hourly):
        return HOUR, expiration.offset
    if isinstance(expiration, Daily):
        return DAY, expiration.offset
    if isinstance(expiration, tuple) and len(expiration) == 2:
        mode, offset = expiration
        if mode == "hourly":
            return HOUR, offset
        if mode == "daily":
            return DAY, offset
        raise ValueError(f"unknown expiration mode: {mode!r}")
    return None


def compute_expiry(expiration: Expiration, now: Optional[int] = None) -> int:
    """
    Turn a relative expiration into an absolute epoch (seconds).

      - int N            -> now + N
      - timedelta        -> now + whole seconds
      - Hourly(offset)   -> start of the current hour + offset
      - Daily(offset)    -> start of the current day + offset

    ("hourly", offset) / ("daily", offset) tuples are accepted too.
    """
    if now is None:
        now = epoch()

    window = _window(expiration)
    if window is not None:
        size, offset = window
        if isinstance(offset, bool) or not isinstance(offset, int):
            raise TypeError(f"expiration offset must be an int, got {type(offset).__name__}")
        return (now - (now % size)) + offset

    if isinstance(expiration, timedelta):
        return now + int(expiration.total_seconds())

    if isinstance(expiration, bool) or not isinstance(expiration, int):
        raise TypeError(f"unsupported expiration: {expiration!r}")
    return now + expiration


def is_expired(claims: Mapping[str, Any], now: Optional[int] = None) -> bool:
    """
    A token without exp never expires. With exp it is expired unless
    there is a strictly positive number of seconds left.
    Raises TypeError if exp is not a finite number.
    """
    if "exp" not in claims:
        return False

    exp = claims["exp"]
    if isinstance(exp, bool) or not isinstance(exp, (int, float)):
        raise TypeError(f"exp claim must be numeric, got {type(exp).__name__}")
    if not math.isfinite(exp):
        raise TypeError(f"exp claim must be finite, got {exp!r}")

    if now is None:
        now = epoch()
    return exp - now <= 0
