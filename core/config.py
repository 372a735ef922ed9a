"""
Defaults and protocol constants shared by the generator and the otpauth codec.
"""

from core.hotp import Algorithm

# ── Generator defaults ────────────────────────────────────────────────────────

DEFAULT_ALGORITHM = Algorithm.SHA1
DEFAULT_DIGITS = 6
DEFAULT_COUNTER = 0
DEFAULT_PERIOD = 30.0

MIN_DIGITS = 6
MAX_DIGITS = 8
MAX_COUNTER = (1 << 64) - 1

# ── otpauth URI ───────────────────────────────────────────────────────────────

OTPAUTH_SCHEME = "otpauth"

FACTOR_COUNTER_HOST = "hotp"
FACTOR_TIMER_HOST = "totp"

QUERY_ALGORITHM = "algorithm"
QUERY_SECRET = "secret"
QUERY_COUNTER = "counter"
QUERY_DIGITS = "digits"
QUERY_PERIOD = "period"
QUERY_ISSUER = "issuer"
