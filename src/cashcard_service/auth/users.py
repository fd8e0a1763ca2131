"""
cashcard_service.auth.users

User directory used for HTTP Basic authentication.

Responsibilities:
- Define the `UserDirectory` protocol (username -> stored credentials + roles).
- Provide an in-memory implementation and the fixed test user set.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol

from cashcard_service.auth.models import CARD_OWNER, NON_OWNER
from cashcard_service.auth.passwords import PasswordEncoder


@dataclass(frozen=True, slots=True)
class UserDetails:
    username: str
    password_hash: str
    roles: frozenset[str]


class UserDirectory(Protocol):
    def load_user(self, username: str) -> UserDetails | None: ...


class InMemoryUserDirectory:
    """Read-only after construction; safe to share across requests."""

    def __init__(self, users: Iterable[UserDetails] = ()) -> None:
        self._users = {u.username: u for u in users}

    def load_user(self, username: str) -> UserDetails | None:
        return self._users.get(username)


def build_user(
    encoder: PasswordEncoder, *, username: str, password: str, roles: Iterable[str]
) -> UserDetails:
    return UserDetails(
        username=username,
        password_hash=encoder.encode(password),
        roles=frozenset(roles),
    )


def fixed_test_users(encoder: PasswordEncoder) -> InMemoryUserDirectory:
    """Two card owners and one authenticated user who may never touch cash cards."""
    return InMemoryUserDirectory(
        [
            build_user(encoder, username="sarah1", password="abc123", roles=[CARD_OWNER]),
            build_user(
                encoder, username="hank-owns-no-cards", password="qrs456", roles=[NON_OWNER]
            ),
            build_user(encoder, username="kumar2", password="xyz789", roles=[CARD_OWNER]),
        ]
    )
