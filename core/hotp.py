"""
HOTP (HMAC-based One-Time Password) implementation following RFC 4226.

The HMAC is computed through :mod:`cryptography`; the truncation and decimal
folding are done here.
"""

from enum import Enum

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives import hmac

from core.errors import HMACFailure, InvalidCounter


class Algorithm(str, Enum):
    """Supported HMAC algorithms. Values are the otpauth URI spellings."""

    SHA1 = "SHA1"
    SHA256 = "SHA256"
    SHA512 = "SHA512"


_ALG_MAP: dict[str, type] = {
    Algorithm.SHA1: hashes.SHA1,
    Algorithm.SHA256: hashes.SHA256,
    Algorithm.SHA512: hashes.SHA512,
}

_COUNTER_LIMIT = 1 << 64


def hmac_digest(secret_bytes: bytes, message: bytes, algorithm: Algorithm) -> bytes:
    """
    Compute ``HMAC(secret_bytes, message)`` with the hash named by ``algorithm``.

    Returns:
        20, 32 or 64 bytes for SHA1, SHA256 and SHA512 respectively.

    Raises:
        HMACFailure: If the crypto backend refuses the hash.
    """
    try:
        mac = hmac.HMAC(secret_bytes, _ALG_MAP[algorithm]())
    except UnsupportedAlgorithm as exc:
        raise HMACFailure(algorithm) from exc
    mac.update(message)
    return mac.finalize()


def truncate(digest: bytes, digits: int) -> str:
    """Dynamic truncation (RFC 4226 §5.3) folded to ``digits`` decimal digits."""
    offset = digest[-1] & 0x0F
    code = int.from_bytes(digest[offset : offset + 4], "big") & 0x7FFFFFFF
    otp = code % (10**digits)
    return str(otp).zfill(digits)


def generate_hotp(
    secret_bytes: bytes,
    counter: int,
    digits: int = 6,
    algorithm: Algorithm = Algorithm.SHA1,
) -> str:
    """
    Generate an HOTP code.

    Args:
        secret_bytes: Raw decoded secret bytes (may be empty).
        counter:      Moving factor, an unsigned 64-bit value.
        digits:       Number of OTP digits.
        algorithm:    HMAC algorithm.

    Returns:
        Zero-padded OTP string.

    Raises:
        InvalidCounter: If ``counter`` does not fit in 8 unsigned bytes.
    """
    if not 0 <= counter < _COUNTER_LIMIT:
        raise InvalidCounter(counter)
    msg = counter.to_bytes(8, "big")
    return truncate(hmac_digest(secret_bytes, msg, algorithm), digits)
