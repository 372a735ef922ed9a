"""
Token: a generator together with the labels shown to the user.
"""

from dataclasses import dataclass, replace

from core.generator import Generator


@dataclass(frozen=True)
class Token:
    """A generator with its account name and issuer."""

    generator: Generator
    name: str = ""
    issuer: str = ""

    @property
    def current_password(self) -> str:
        return self.generator.password()

    def updated_token(self) -> "Token":
        """
        Return the token to use after a password has been consumed.

        Counter-based tokens move to the next counter value; time-based tokens
        advance on their own and are returned unchanged.
        """
        generator = self.generator.successor()
        if generator is self.generator:
            return self
        return replace(self, generator=generator)
