"""
Moving factors for the OTP generator.

A generator is driven either by an explicit counter (HOTP, RFC 4226) or by
the number of fixed-length time steps since the Unix epoch (TOTP, RFC 6238).
Both variants answer ``moving_factor(at)`` themselves, so callers never have
to branch on which one they hold.
"""

import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Union

from core.config import DEFAULT_COUNTER, DEFAULT_PERIOD, MAX_COUNTER
from core.errors import InvalidCounter, InvalidPeriod

# None means "now"; numbers are Unix timestamps in seconds.
Instant = Union[None, int, float, datetime]


def is_int(value: object) -> bool:
    """True for real integers; bool is excluded even though it subclasses int."""
    return isinstance(value, int) and not isinstance(value, bool)


def seconds_since_epoch(at: Instant = None) -> float:
    """Return ``at`` as seconds since the Unix epoch. Naive datetimes are UTC."""
    if at is None:
        return time.time()
    if isinstance(at, datetime):
        if at.tzinfo is None:
            at = at.replace(tzinfo=timezone.utc)
        return at.timestamp()
    return at


@dataclass(frozen=True)
class Counter:
    """HOTP factor: an explicit counter, advanced only by the caller."""

    value: int = DEFAULT_COUNTER

    def validate(self) -> None:
        if not is_int(self.value) or not 0 <= self.value <= MAX_COUNTER:
            raise InvalidCounter(self.value)

    def moving_factor(self, at: Instant = None) -> int:
        return self.value

    def advanced(self) -> "Counter":
        return Counter(self.value + 1)


@dataclass(frozen=True)
class Timer:
    """TOTP factor: one step every ``period`` seconds since the Unix epoch."""

    period: float = DEFAULT_PERIOD

    def validate(self) -> None:
        if isinstance(self.period, bool) or not isinstance(self.period, (int, float)):
            raise InvalidPeriod(self.period)
        # Written as a negation so that NaN is rejected too.
        if not self.period > 0:
            raise InvalidPeriod(self.period)

    def moving_factor(self, at: Instant = None) -> int:
        return int(seconds_since_epoch(at) // self.period)

    def advanced(self) -> "Timer":
        return self

    def remaining_seconds(self, at: Instant = None) -> float:
        """Return seconds until the current time step expires, in (0, period]."""
        return self.period - (seconds_since_epoch(at) % self.period)


Factor = Union[Counter, Timer]


def moving_factor(factor: Factor, at: Instant = None) -> int:
    """
    Map ``factor`` and an instant to the 64-bit value fed to the HMAC.

    Counters ignore ``at``. Timers floor-divide the Unix time by the period.
    """
    return factor.moving_factor(at)
