"""
cashcard_service.auth.passwords

One-way password encoding.

Responsibilities:
- Encode plaintext passwords with argon2 when the user directory is built.
- Verify presented passwords against stored hashes at request time.
"""

from __future__ import annotations

from argon2 import PasswordHasher
from argon2 import exceptions as argon_exc

from cashcard_service.settings import Settings


class PasswordEncoder:
    def __init__(self, hasher: PasswordHasher | None = None) -> None:
        self._hasher = hasher or PasswordHasher()
        # Verified against when the username is unknown, so both paths cost one hash.
        self._dummy_hash = self._hasher.hash("cashcard-dummy-password")

    @classmethod
    def from_settings(cls, settings: Settings) -> PasswordEncoder:
        return cls(
            PasswordHasher(
                time_cost=settings.password_time_cost,
                memory_cost=settings.password_memory_cost,
                parallelism=settings.password_parallelism,
            )
        )

    def encode(self, raw_password: str) -> str:
        return self._hasher.hash(raw_password)

    def matches(self, raw_password: str, encoded_password: str) -> bool:
        try:
            return self._hasher.verify(encoded_password, raw_password)
        except (argon_exc.VerificationError, argon_exc.InvalidHashError):
            return False

    def burn(self, raw_password: str) -> None:
        """Spend one verification on the dummy hash; the result is always discarded."""
        self.matches(raw_password, self._dummy_hash)
