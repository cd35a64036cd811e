from __future__ import annotations

from typing import Optional, Protocol

from .model import Credential


class CredentialRepository(Protocol):
    def get_by_email(self, email: str) -> Optional[Credential]:
        raise NotImplementedError

    def create(self, *, user_id: str, email: str, password_hash: str) -> None:
        raise NotImplementedError

    def delete(self, user_id: str) -> None:
        raise NotImplementedError
