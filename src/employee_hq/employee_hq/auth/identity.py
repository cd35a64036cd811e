from __future__ import annotations

import logging
import uuid
from typing import Callable, List, MutableMapping, Optional, Protocol

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty
from ..core.enums import SessionEvent
from ..core.exceptions import AuthenticationError, UniqueConstraintViolation, ValidationError
from .model import IdentityUser
from .repository import CredentialRepository

logger = logging.getLogger(__name__)

SessionCallback = Callable[[SessionEvent, Optional[IdentityUser]], None]


class IdentityProvider(Protocol):
    """What the rest of the app needs from whoever authenticates users."""

    def current_user(self) -> Optional[IdentityUser]:
        raise NotImplementedError

    def on_session_change(self, callback: SessionCallback) -> Callable[[], None]:
        """Subscribe to session events; returns an unsubscribe function."""

        raise NotImplementedError

    def sign_out(self) -> None:
        raise NotImplementedError


class SessionIdentityProvider(IdentityProvider):
    """Password identity provider that keeps the signed-in user in a session mapping.

    In the web app the mapping is the Flask session; tests pass a plain dict.
    """

    USER_KEY = "user_id"
    EMAIL_KEY = "email"

    def __init__(self, credentials: CredentialRepository, store: MutableMapping):
        self._credentials = credentials
        self._store = store
        self._listeners: List[SessionCallback] = []

    def current_user(self) -> Optional[IdentityUser]:
        user_id = self._store.get(self.USER_KEY)
        if not user_id:
            return None
        return IdentityUser(id=str(user_id), email=self._store.get(self.EMAIL_KEY, ""))

    def on_session_change(self, callback: SessionCallback) -> Callable[[], None]:
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _emit(self, event: SessionEvent, user: Optional[IdentityUser]) -> None:
        for callback in list(self._listeners):
            callback(event, user)

    def sign_up(
        self,
        email: str,
        password: str,
        *,
        on_created: Optional[Callable[[IdentityUser], None]] = None,
    ) -> IdentityUser:
        """Create a credential. If `on_created` raises, the credential is removed again."""

        email = require_non_empty(email, "Email").lower()
        require_min_length(password, "Password", 6)

        if self._credentials.get_by_email(email):
            raise ValidationError("Email is already registered")

        user_id = str(uuid.uuid4())
        try:
            self._credentials.create(user_id=user_id, email=email, password_hash=generate_password_hash(password))
        except UniqueConstraintViolation as exc:
            raise ValidationError("Email is already registered") from exc

        user = IdentityUser(id=user_id, email=email)
        if on_created is not None:
            try:
                on_created(user)
            except Exception:
                self._credentials.delete(user_id)
                logger.info("Rolled back identity %s for %s", user_id, email)
                raise

        logger.info("Created identity %s for %s", user_id, email)
        return user

    def sign_in(self, email: str, password: str) -> IdentityUser:
        credential = self._credentials.get_by_email((email or "").strip().lower())
        if not credential or not credential.is_active:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(credential.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            logger.info("Failed sign-in for %s", credential.email)
            raise AuthenticationError("Invalid email or password")

        user = IdentityUser(id=credential.user_id, email=credential.email)
        self._store[self.USER_KEY] = user.id
        self._store[self.EMAIL_KEY] = user.email
        self._emit(SessionEvent.SIGNED_IN, user)
        return user

    def refresh(self) -> None:
        user = self.current_user()
        if user:
            self._emit(SessionEvent.TOKEN_REFRESHED, user)

    def sign_out(self) -> None:
        self._store.pop(self.USER_KEY, None)
        self._store.pop(self.EMAIL_KEY, None)
        self._emit(SessionEvent.SIGNED_OUT, None)
