from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class Profile:
    """Domain entity: the employee behind an identity.

    Note: `user_id` is the identity provider's user id.
    """

    user_id: str
    employee_id: str
    name: str
    department: str


@dataclass(frozen=True)
class UserRole:
    user_id: str
    role: Role
