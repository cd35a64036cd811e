from __future__ import annotations

import logging
import threading
from concurrent.futures import Executor, Future
from typing import Callable, Optional

from ..core.enums import Role, SessionEvent
from ..core.exceptions import StoreError
from ..profiles.model import Profile
from ..profiles.repository import ProfileRepository
from .identity import IdentityProvider
from .model import IdentityUser

logger = logging.getLogger(__name__)


class SessionContext:
    """Current user, profile and role for one client session.

    Constructed explicitly and handed to whatever needs it. `init()` subscribes
    to the identity provider and loads the current user; `dispose()`
    unsubscribes. Every session event starts one profile+role fetch; a result
    is applied only if no newer event arrived meanwhile (last event wins).
    """

    def __init__(
        self,
        identity: IdentityProvider,
        profiles: ProfileRepository,
        *,
        executor: Optional[Executor] = None,
    ):
        self._identity = identity
        self._profiles = profiles
        self._executor = executor
        self._lock = threading.Lock()
        self._generation = 0
        self._unsubscribe: Optional[Callable[[], None]] = None

        self.user: Optional[IdentityUser] = None
        self.profile: Optional[Profile] = None
        self.role: Optional[Role] = None
        self.loading = True

    @property
    def user_id(self) -> Optional[str]:
        return self.user.id if self.user else None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def is_manager(self) -> bool:
        return self.role == Role.MANAGER

    def init(self) -> "SessionContext":
        if self._unsubscribe is not None:
            return self
        self._unsubscribe = self._identity.on_session_change(self._on_session_change)
        user = self._identity.current_user()
        self._on_session_change(SessionEvent.SIGNED_IN if user else SessionEvent.SIGNED_OUT, user)
        return self

    def dispose(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        with self._lock:
            # Invalidate any fetch still in flight.
            self._generation += 1

    def _on_session_change(self, event: SessionEvent, user: Optional[IdentityUser]) -> None:
        with self._lock:
            self._generation += 1
            token = self._generation
            self.user = user
            if user is None:
                self.profile = None
                self.role = None
                self.loading = False
                return
            self.loading = True

        logger.debug("Session event %s for %s (generation %s)", event.value, user.id, token)
        if self._executor is not None:
            future = self._executor.submit(self._load, token, user.id)
            future.add_done_callback(lambda f: self._on_load_done(f, token, user.id))
        else:
            self._load(token, user.id)

    def _on_load_done(self, future: Future, token: int, user_id: str) -> None:
        if future.cancelled():
            return
        exc = future.exception()
        if exc is None:
            return
        logger.error("Profile fetch for %s failed", user_id, exc_info=exc)
        with self._lock:
            if token == self._generation:
                self.loading = False

    def _load(self, token: int, user_id: str) -> bool:
        try:
            profile = self._profiles.get_by_id(user_id)
            role = self._profiles.get_role(user_id)
        except StoreError:
            logger.exception("Could not load profile/role for %s", user_id)
            profile, role = None, None

        with self._lock:
            if token != self._generation:
                logger.debug("Discarding stale profile fetch for %s (generation %s)", user_id, token)
                return False
            self.profile = profile
            self.role = role
            self.loading = False
            return True
