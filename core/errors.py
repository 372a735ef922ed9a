"""
Exception hierarchy for generator construction and password computation.

Every exception names the offending field and keeps the offending value as an
attribute, so callers can branch on the class instead of parsing messages.
"""

from typing import Any


class OTPError(Exception):
    """Root of every error raised by this package."""

    field: str = ""


# ── Construction ──────────────────────────────────────────────────────────────

class GeneratorError(OTPError, ValueError):
    """A generator could not be built from the given parameters."""


class InvalidDigits(GeneratorError):
    field = "digits"

    def __init__(self, digits: Any) -> None:
        self.digits = digits
        super().__init__(f"Digits must be an integer between 6 and 8, got {digits!r}.")


class InvalidPeriod(GeneratorError):
    field = "period"

    def __init__(self, period: Any) -> None:
        self.period = period
        super().__init__(f"Timer period must be a strictly positive number, got {period!r}.")


class InvalidCounter(GeneratorError):
    field = "counter"

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(f"Counter must be an unsigned 64-bit integer, got {value!r}.")


# ── Password computation ──────────────────────────────────────────────────────

class PasswordError(OTPError):
    """A password could not be computed for the requested instant."""


class InvalidTime(PasswordError):
    field = "time"

    def __init__(self, timestamp: float) -> None:
        self.timestamp = timestamp
        super().__init__(f"Cannot compute a time step for timestamp {timestamp!r}.")


class HMACFailure(PasswordError):
    field = "algorithm"

    def __init__(self, algorithm: Any) -> None:
        self.algorithm = algorithm
        super().__init__(f"HMAC backend does not support {algorithm!r}.")
