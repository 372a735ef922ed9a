"""Tests for core.token."""

import time

import pytest

from core.factor import Counter, Timer
from core.generator import Generator
from core.hotp import Algorithm
from core.token import Token

SECRET = b"12345678901234567890"
OTHER_SECRET = b"09876543210987654321"


@pytest.fixture()
def frozen_time(monkeypatch: pytest.MonkeyPatch) -> float:
    """Pin time.time() so that 'now' cannot cross a step boundary mid-test."""
    now = 1111111109.0
    monkeypatch.setattr(time, "time", lambda: now)
    return now


def test_init() -> None:
    generator = Generator(Counter(111), SECRET, Algorithm.SHA1, 6)
    token = Token(generator=generator, name="Test Name", issuer="Test Issuer")
    assert token.name == "Test Name"
    assert token.issuer == "Test Issuer"
    assert token.generator == generator

    other_generator = Generator(Timer(123), OTHER_SECRET, Algorithm.SHA512, 8)
    other = Token(generator=other_generator, name="Other", issuer="Other Issuer")
    assert other != token
    assert other.generator != token.generator


def test_defaults() -> None:
    generator = Generator(Counter(0), b"", Algorithm.SHA1, 6)
    assert Token(generator, issuer="Issuer").name == ""
    assert Token(generator, name="Name").issuer == ""
    token = Token(generator)
    assert (token.name, token.issuer) == ("", "")


def test_token_is_immutable() -> None:
    token = Token(Generator(Counter(0), SECRET))
    with pytest.raises(AttributeError):
        token.name = "changed"  # type: ignore[misc]


# ── Current password ──────────────────────────────────────────────────────────

def test_current_password_timer(frozen_time: float) -> None:
    token = Token(Generator(Timer(30), SECRET, Algorithm.SHA1, 8))
    assert token.current_password == token.generator.password(frozen_time)
    assert token.current_password == "07081804"
    assert token.current_password != token.generator.password(0)


def test_current_password_counter(frozen_time: float) -> None:
    token = Token(Generator(Counter(12345), OTHER_SECRET, Algorithm.SHA1, 6))
    assert token.current_password == token.generator.password(frozen_time)
    assert token.current_password == token.generator.password(0)


def test_current_password_does_not_advance() -> None:
    token = Token(Generator(Counter(0), SECRET))
    assert token.current_password == "755224"
    assert token.current_password == "755224"
    assert token.generator.factor == Counter(0)


# ── Updated token ─────────────────────────────────────────────────────────────

def test_updated_token_timer_unchanged() -> None:
    token = Token(Generator(Timer(30), SECRET, Algorithm.SHA1, 6))
    assert token.updated_token() == token


def test_updated_token_counter_advances_by_one() -> None:
    token = Token(
        Generator(Counter(12345), OTHER_SECRET, Algorithm.SHA1, 6),
        name="Name",
        issuer="Issuer",
    )
    updated = token.updated_token()

    assert updated != token
    assert updated.name == token.name
    assert updated.issuer == token.issuer
    assert updated.generator.secret == token.generator.secret
    assert updated.generator.algorithm == token.generator.algorithm
    assert updated.generator.digits == token.generator.digits
    assert updated.generator.factor == Counter(12346)
    assert token.generator.factor == Counter(12345)


def test_updated_token_walks_rfc_sequence() -> None:
    token = Token(Generator(Counter(0), SECRET))
    codes = []
    for _ in range(3):
        codes.append(token.current_password)
        token = token.updated_token()
    assert codes == ["755224", "287082", "359152"]
