"""
Errors raised while building or parsing ``otpauth://`` URIs.
"""

from typing import Optional

from core.errors import OTPError


class SerializationError(OTPError):
    """A token could not be written out as a URI."""


class UriGenerationFailure(SerializationError):
    field = "uri"

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Cannot build otpauth URI: {reason}.")


class DeserializationError(OTPError, ValueError):
    """
    A URI could not be turned into a generator.

    ``raw`` holds the offending text exactly as it appeared in the URI, or
    None when the failure is an absence.
    """

    message = "Invalid otpauth URI"
    # Secrets stay out of str(exc) so that logging an exception is safe.
    echo_raw = True

    def __init__(self, raw: Optional[str] = None) -> None:
        self.raw = raw
        if raw is None or not self.echo_raw:
            text = f"{self.message}."
        else:
            text = f"{self.message}: {raw!r}."
        super().__init__(text)


class InvalidURLScheme(DeserializationError):
    field = "scheme"
    message = "Expected the 'otpauth' scheme"


class DuplicateQueryItem(DeserializationError):
    message = "Query parameter appears more than once"

    def __init__(self, key: str) -> None:
        self.field = key
        super().__init__(key)


class MissingFactor(DeserializationError):
    field = "factor"
    message = "Missing OTP type, expected hotp or totp"


class InvalidFactor(DeserializationError):
    field = "factor"
    message = "Unknown OTP type, expected hotp or totp"


class InvalidCounterValue(DeserializationError):
    field = "counter"
    message = "Counter is not an unsigned 64-bit integer"


class InvalidTimerPeriod(DeserializationError):
    field = "period"
    message = "Period is not a number"


class MissingSecret(DeserializationError):
    field = "secret"
    message = "No secret in the URI and none supplied"


class InvalidSecret(DeserializationError):
    field = "secret"
    message = "Secret is not valid Base32"
    echo_raw = False


class InvalidAlgorithm(DeserializationError):
    field = "algorithm"
    message = "Unsupported algorithm, expected SHA1, SHA256 or SHA512"


class InvalidDigitsValue(DeserializationError):
    field = "digits"
    message = "Digits is not an integer"


# Same name as the failure reported in URIs; core.errors.InvalidDigits is the
# out-of-range construction error.
InvalidDigits = InvalidDigitsValue
