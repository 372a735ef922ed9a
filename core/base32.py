"""
RFC 4648 Base32 codec used to carry OTP secrets as text.

Decoding is lenient by default: padding is optional, case is ignored and any
character outside the alphabet is skipped. That matches what authenticator
apps accept from hand-typed secrets (``"JBSW Y3DP-EHPK"``). Pass
``strict=True`` to reject such characters instead.
"""

import base64
from typing import Optional

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"
PAD = "="

_INVALID = 255


def _build_decoding_table() -> bytes:
    table = bytearray([_INVALID]) * 256
    for value, char in enumerate(ALPHABET):
        table[ord(char)] = value
        table[ord(char.lower())] = value
    return bytes(table)


_DECODING_TABLE = _build_decoding_table()

# Bytes recovered from a trailing group of k symbols (k = 0..7).
_DECODED_TAIL = (0, 0, 1, 1, 2, 3, 3, 4)


# ── Public API ────────────────────────────────────────────────────────────────

def decode(text: str, strict: bool = False) -> Optional[bytes]:
    """
    Decode Base32 ``text`` to raw bytes.

    A trailing group of any length is accepted; leftover bits that do not
    fill a byte are dropped.

    Args:
        text:   Base32 text, padded or not, any case.
        strict: Return None on characters outside the alphabet instead of
                skipping them.

    Returns:
        The decoded bytes, or None if ``text`` is not ASCII (or, in strict
        mode, contains a character outside the alphabet).
    """
    try:
        raw = text.replace(PAD, "").encode("ascii")
    except UnicodeEncodeError:
        return None

    symbols = []
    for char in raw:
        value = _DECODING_TABLE[char]
        if value == _INVALID:
            if strict:
                return None
            continue
        symbols.append(ALPHABET[value])

    # b32decode only takes whole 8-symbol groups; fill with zero bits.
    full_groups, tail = divmod(len(symbols), 8)
    canonical = "".join(symbols) + "A" * ((8 - tail) % 8)
    decoded = base64.b32decode(canonical)
    return decoded[: full_groups * 5 + _DECODED_TAIL[tail]]


def encode(data: bytes) -> str:
    """
    Encode ``data`` as Base32, padded with ``=`` to a multiple of 8 characters.

    Example::

        >>> encode(b"foo")
        'MZXW6==='
    """
    return base64.b32encode(bytes(data)).decode("ascii")
