"""
Second-factor verification used by the login flow.

The login handler depends only on the ``TwoFactorVerifier`` interface; the
pattern verifier below is a placeholder that checks code syntax, not a
real one-time password.
"""
import re
from typing import Protocol


class TwoFactorVerifier(Protocol):
    def verify(self, user, code: str) -> bool:
        ...


class PatternTwoFactorVerifier:
    """Accepts any code made of exactly six digits."""

    pattern = re.compile(r"[0-9]{6}")

    def verify(self, user, code: str) -> bool:
        return bool(code) and self.pattern.fullmatch(code) is not None
