"""
cashcard_service.auth.models

Auth domain models.

Responsibilities:
- Define the authenticated identity type (`Principal`) injected into endpoints.
- Name the roles known to the service.
"""

from __future__ import annotations

from dataclasses import dataclass

CARD_OWNER = "CARD-OWNER"
NON_OWNER = "NON-OWNER"


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Authenticated caller identity. `username` is the ownership key for cash cards.
    """

    username: str
    roles: frozenset[str]

    def has_role(self, role: str) -> bool:
        return role in self.roles
