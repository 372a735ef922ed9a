"""
Immutable OTP generator: factor, secret, algorithm and digit count.
"""

import logging
from dataclasses import dataclass, field, replace

from core.config import DEFAULT_ALGORITHM, DEFAULT_DIGITS, MAX_COUNTER, MAX_DIGITS, MIN_DIGITS
from core.errors import InvalidDigits, InvalidTime
from core.factor import Factor, Instant, is_int, seconds_since_epoch
from core.hotp import Algorithm, generate_hotp

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Generator:
    """
    Everything needed to reproduce a sequence of one-time passwords.

    Construction validates the parameters once; a live instance is always
    able to produce passwords. Instances compare and hash by value. The secret
    is kept out of ``repr()``.

    Raises:
        InvalidDigits:  ``digits`` outside 6..8.
        InvalidPeriod:  Timer period not strictly positive.
        InvalidCounter: Counter value outside the unsigned 64-bit range.
    """

    factor: Factor
    secret: bytes = field(repr=False)
    algorithm: Algorithm = DEFAULT_ALGORITHM
    digits: int = DEFAULT_DIGITS

    def __post_init__(self) -> None:
        if not isinstance(self.secret, bytes):
            object.__setattr__(self, "secret", bytes(self.secret))
        object.__setattr__(self, "algorithm", Algorithm(self.algorithm))
        if not is_int(self.digits) or not MIN_DIGITS <= self.digits <= MAX_DIGITS:
            raise InvalidDigits(self.digits)
        self.factor.validate()

    def password(self, at: Instant = None) -> str:
        """
        Compute the password for instant ``at`` (defaults to now).

        Reading a password never advances a counter; see :meth:`successor`.

        Raises:
            InvalidTime: If ``at`` lies before the Unix epoch for a timer.
        """
        timestamp = seconds_since_epoch(at)
        counter = self.factor.moving_factor(timestamp)
        if not 0 <= counter <= MAX_COUNTER:
            logger.debug("No time step for timestamp %r", timestamp)
            raise InvalidTime(timestamp)
        return generate_hotp(self.secret, counter, self.digits, self.algorithm)

    def successor(self) -> "Generator":
        """Return the generator for the next counter value (timers return self)."""
        factor = self.factor.advanced()
        if factor is self.factor:
            return self
        return replace(self, factor=factor)
