from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import UniqueConstraintViolation, ValidationError
from .model import Profile
from .repository import ProfileRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProfileDraft:
    """Validated profile fields, not yet tied to an identity."""

    employee_id: str
    name: str
    department: str


class ProfileService:
    """Use case: register the profile and role that belong to an identity."""

    def __init__(self, profiles: ProfileRepository):
        self._profiles = profiles

    def prepare(self, *, employee_id: str, name: str, department: str) -> ProfileDraft:
        """Validate fields and employee ID availability before anything is written."""

        draft = ProfileDraft(
            employee_id=require_non_empty(employee_id, "Employee ID"),
            name=require_non_empty(name, "Name"),
            department=(department or "").strip(),
        )
        if self._profiles.get_by_employee_id(draft.employee_id):
            raise ValidationError("Employee ID is already taken")
        return draft

    def register(
        self,
        *,
        user_id: str,
        employee_id: str,
        name: str,
        department: str,
        role: Role = Role.EMPLOYEE,
    ) -> Profile:
        user_id = require_non_empty(user_id, "User id")
        draft = self.prepare(employee_id=employee_id, name=name, department=department)

        if self._profiles.get_by_id(user_id):
            raise ValidationError("Profile already exists for this user")

        try:
            profile = self._profiles.create_profile(
                user_id=user_id,
                employee_id=draft.employee_id,
                name=draft.name,
                department=draft.department,
                role=role,
            )
        except UniqueConstraintViolation as exc:
            raise ValidationError("Employee ID is already taken") from exc

        logger.info("Registered profile %s (%s) as %s", draft.employee_id, user_id, role.value)
        return profile

    def list_profiles(self) -> Sequence[Profile]:
        return self._profiles.list_all()
