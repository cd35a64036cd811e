from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class IdentityUser:
    """What the identity provider knows about a signed-in user."""

    id: str
    email: str


@dataclass(frozen=True)
class Credential:
    user_id: str
    email: str
    password_hash: str
    is_active: bool = True
