"""Shared-password session gate for the staff views."""

from __future__ import annotations

import logging

from comanda.clock import Clock
from comanda.config import SHARED_PASSWORD
from comanda.errors import NotAuthorizedError
from comanda.models import Session
from comanda.persistence import SESSION_KEY, KeyValueStore
from comanda.serialization import session_from_dict, session_to_dict

logger = logging.getLogger(__name__)


class SessionGate:
    def __init__(self, store: KeyValueStore, clock: Clock | None = None, password: str = SHARED_PASSWORD) -> None:
        self.store = store
        self.clock = clock or Clock()
        self._password = password

    def login(self, user: str, password: str, role: str) -> bool:
        """Start a session for ``role`` if ``password`` matches the shared one."""
        if password != self._password:
            logger.info("login rejected for %r", user)
            return False
        session = Session(user=user, role=role, timestamp=self.clock.now_millis())
        self.store.set(SESSION_KEY, session_to_dict(session))
        logger.info("session started user=%r role=%r", user, role)
        return True

    def logout(self) -> None:
        self.store.delete(SESSION_KEY)

    def current(self) -> Session | None:
        raw = self.store.get(SESSION_KEY)
        if raw is None:
            return None
        try:
            return session_from_dict(raw)
        except (TypeError, ValueError) as exc:
            logger.warning("stored session is malformed (%s); treating as logged out", exc)
            return None

    def is_authorized(self) -> bool:
        session = self.current()
        return session is not None and bool(session.role)

    def require(self) -> Session:
        """Return the current session or raise ``NotAuthorizedError``."""
        session = self.current()
        if session is None or not session.role:
            raise NotAuthorizedError("Login required")
        return session
