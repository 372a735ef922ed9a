"""
Build and parse otpauth:// URIs as defined by the Google Authenticator Key URI Format.

Reference: https://github.com/google/google-authenticator/wiki/Key-Uri-Format

The builder never embeds the secret; the party holding the token already has
it and passes it back to :func:`deserialize` as ``secret``. A ``secret``
query parameter is still honoured when parsing URIs produced elsewhere.
"""

import logging
import re
from typing import Optional
from urllib.parse import quote, unquote, urlencode, urlsplit

from core import base32
from core.config import (
    DEFAULT_ALGORITHM,
    DEFAULT_COUNTER,
    DEFAULT_DIGITS,
    DEFAULT_PERIOD,
    FACTOR_COUNTER_HOST,
    FACTOR_TIMER_HOST,
    MAX_COUNTER,
    OTPAUTH_SCHEME,
    QUERY_ALGORITHM,
    QUERY_COUNTER,
    QUERY_DIGITS,
    QUERY_ISSUER,
    QUERY_PERIOD,
    QUERY_SECRET,
)
from core.errors import OTPError
from core.factor import Counter, Factor, Timer
from core.generator import Generator
from core.hotp import Algorithm
from core.token import Token
from otpauth.errors import (
    DuplicateQueryItem,
    InvalidAlgorithm,
    InvalidCounterValue,
    InvalidDigitsValue,
    InvalidFactor,
    InvalidSecret,
    InvalidTimerPeriod,
    InvalidURLScheme,
    MissingFactor,
    MissingSecret,
    UriGenerationFailure,
)

logger = logging.getLogger(__name__)

_UNSIGNED = re.compile(r"\+?[0-9]+")
_SIGNED = re.compile(r"[+-]?[0-9]+")
_DECIMAL = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1

QueryItems = list[tuple[str, Optional[str]]]


# ── Query helpers ─────────────────────────────────────────────────────────────

def _query_items(query: str) -> QueryItems:
    """
    Split a raw query string into ordered ``(key, value)`` pairs.

    ``+`` is kept literally. An item without ``=`` has value None.
    """
    items: QueryItems = []
    for part in query.split("&"):
        if not part:
            continue
        key, sep, value = part.partition("=")
        items.append((unquote(key), unquote(value) if sep else None))
    return items


def unique_query_values(items: QueryItems) -> dict[str, Optional[str]]:
    """
    Index query pairs by key.

    Raises:
        DuplicateQueryItem: On the first key seen twice, whichever key it is.
    """
    values: dict[str, Optional[str]] = {}
    for key, value in items:
        if key in values:
            raise DuplicateQueryItem(key)
        values[key] = value
    return values


def _host(netloc: str) -> str:
    """
    Return the host part of an authority, case preserved.

    ``urlsplit(...).hostname`` lowercases, which would let ``HOTP`` through.
    """
    host = netloc.rpartition("@")[2]
    if host.startswith("["):
        return host.partition("]")[0] + "]"
    return host.partition(":")[0]


# ── Value parsers ─────────────────────────────────────────────────────────────

def _parse_counter(raw: str) -> int:
    if _UNSIGNED.fullmatch(raw):
        value = int(raw)
        if value <= MAX_COUNTER:
            return value
    raise InvalidCounterValue(raw)


def _parse_period(raw: str) -> float:
    if not _DECIMAL.fullmatch(raw):
        raise InvalidTimerPeriod(raw)
    return float(raw)


def _parse_digits(raw: str) -> int:
    if _SIGNED.fullmatch(raw):
        value = int(raw)
        if _INT64_MIN <= value <= _INT64_MAX:
            return value
    raise InvalidDigitsValue(raw)


def _parse_algorithm(raw: str) -> Algorithm:
    try:
        return Algorithm(raw)
    except ValueError:
        raise InvalidAlgorithm(raw) from None


def _parse_factor(host: str, values: dict[str, Optional[str]]) -> Factor:
    if not host:
        raise MissingFactor()
    if host == FACTOR_COUNTER_HOST:
        raw = values.get(QUERY_COUNTER)
        return Counter(DEFAULT_COUNTER if raw is None else _parse_counter(raw))
    if host == FACTOR_TIMER_HOST:
        raw = values.get(QUERY_PERIOD)
        return Timer(DEFAULT_PERIOD if raw is None else _parse_period(raw))
    raise InvalidFactor(host)


def _short_name(issuer: str, full_name: str) -> str:
    """Strip a leading ``"<issuer>:"`` from the label, if present."""
    if issuer:
        prefix = issuer + ":"
        if full_name.startswith(prefix):
            return full_name[len(prefix) :].strip()
    return full_name


# ── Public API ────────────────────────────────────────────────────────────────

def serialize(
    name: str,
    issuer: str,
    factor: Factor,
    algorithm: Algorithm = DEFAULT_ALGORITHM,
    digits: int = DEFAULT_DIGITS,
) -> str:
    """
    Build an ``otpauth://`` URI for the given generator parameters.

    The secret is deliberately not part of the result.

    Raises:
        UriGenerationFailure: If the name or issuer cannot be percent-encoded
            or the timer period is not finite.
    """
    if isinstance(factor, Counter):
        host = FACTOR_COUNTER_HOST
        factor_param = (QUERY_COUNTER, str(factor.value))
    elif isinstance(factor, Timer):
        host = FACTOR_TIMER_HOST
        try:
            factor_param = (QUERY_PERIOD, str(int(factor.period)))
        except (OverflowError, ValueError):
            raise UriGenerationFailure(f"period {factor.period!r} is not finite") from None
    else:
        raise TypeError(f"Unsupported factor {factor!r}")

    params = [
        (QUERY_ALGORITHM, Algorithm(algorithm).value),
        (QUERY_DIGITS, str(digits)),
        (QUERY_ISSUER, issuer),
        factor_param,
    ]
    try:
        path = quote("/" + name, safe="/:@")
        query = urlencode(params, quote_via=quote)
    except UnicodeEncodeError as exc:
        raise UriGenerationFailure(f"label is not encodable ({exc.reason})") from None
    return f"{OTPAUTH_SCHEME}://{host}{path}?{query}"


def deserialize(uri: str, secret: Optional[bytes] = None) -> tuple[Generator, str, str]:
    """
    Parse and validate an ``otpauth://`` URI.

    Args:
        uri:    Full otpauth URI string.
        secret: Raw secret bytes. Takes precedence over a ``secret`` query
                parameter when given.

    Returns:
        ``(generator, name, issuer)``.

    Raises:
        DeserializationError: If the URI is malformed or holds invalid values.
        GeneratorError:       If the values are well formed but out of range.
    """
    try:
        return _deserialize(uri, secret)
    except OTPError as exc:
        # Field and error class only; the raw value may be the secret.
        logger.debug("Rejected otpauth URI: %s (%s)", type(exc).__name__, exc.field)
        raise


def _deserialize(uri: str, external_secret: Optional[bytes]) -> tuple[Generator, str, str]:
    uri = uri.strip()
    try:
        parsed = urlsplit(uri)
    except ValueError:
        # urlsplit only rejects unbalanced IPv6 brackets in the authority.
        raise InvalidFactor(uri) from None

    # urlsplit lowercases the scheme; compare it as written.
    scheme = uri[: len(parsed.scheme)]
    if scheme != OTPAUTH_SCHEME:
        raise InvalidURLScheme(scheme)

    values = unique_query_values(_query_items(parsed.query))

    factor = _parse_factor(_host(parsed.netloc), values)

    raw_algorithm = values.get(QUERY_ALGORITHM)
    algorithm = DEFAULT_ALGORITHM if raw_algorithm is None else _parse_algorithm(raw_algorithm)

    raw_digits = values.get(QUERY_DIGITS)
    digits = DEFAULT_DIGITS if raw_digits is None else _parse_digits(raw_digits)

    secret = external_secret
    if secret is None:
        raw_secret = values.get(QUERY_SECRET)
        if raw_secret is None:
            raise MissingSecret()
        secret = base32.decode(raw_secret)
        if secret is None:
            raise InvalidSecret(raw_secret)

    generator = Generator(factor, secret, algorithm, digits)

    path = unquote(parsed.path)
    full_name = path[1:] if path.startswith("/") else path

    issuer = values.get(QUERY_ISSUER)
    if issuer is None:
        label_issuer, sep, _ = full_name.partition(":")
        issuer = label_issuer if sep else ""

    return generator, _short_name(issuer, full_name), issuer


def token_to_uri(token: Token) -> str:
    """Serialize ``token`` (without its secret)."""
    generator = token.generator
    return serialize(token.name, token.issuer, generator.factor, generator.algorithm, generator.digits)


def token_from_uri(uri: str, secret: Optional[bytes] = None) -> Token:
    """Build a :class:`Token` from ``uri``; see :func:`deserialize`."""
    generator, name, issuer = deserialize(uri, secret)
    return Token(generator=generator, name=name, issuer=issuer)
