"""Session provider.

Signing in happens with an external identity provider; this module only
holds the resulting session and answers whether the caller is
authenticated. Listeners are told whenever the session changes.
"""

import os
from dataclasses import dataclass, field
from datetime import datetime, UTC
from typing import Callable, Optional

from ledgerbook.logging_setup import get_logger

logger = get_logger(__name__)

SESSION_TOKEN_ENV = "LEDGERBOOK_SESSION_TOKEN"
SESSION_USER_ENV = "LEDGERBOOK_SESSION_USER"


@dataclass(frozen=True)
class Session:
    """An authenticated session issued by the identity provider."""

    user: str
    token: str = field(repr=False)
    issued_at: datetime = field(default_factory=lambda: datetime.now(UTC))


SessionListener = Callable[[Optional[Session]], None]


class SessionProvider:
    """Holds the current session and notifies listeners of changes."""

    def __init__(self, session: Optional[Session] = None):
        self._session = session
        self._listeners: list[SessionListener] = []

    def current_session(self) -> Optional[Session]:
        return self._session

    def is_authenticated(self) -> bool:
        return self._session is not None

    def on_change(self, callback: SessionListener) -> Callable[[], None]:
        """Register a listener. Returns a function that removes it."""
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def sign_in(self, session: Session) -> None:
        """Adopt a session issued by the identity provider."""
        self._set(session)

    def sign_out(self) -> None:
        self._set(None)

    def _set(self, session: Optional[Session]) -> None:
        if session == self._session:
            return
        self._session = session
        logger.info("Session changed: %s", session.user if session else "signed out")
        for listener in list(self._listeners):
            listener(session)


def session_from_env() -> Optional[Session]:
    """Build a session from LEDGERBOOK_SESSION_TOKEN / LEDGERBOOK_SESSION_USER."""
    token = os.environ.get(SESSION_TOKEN_ENV)
    if not token:
        return None
    return Session(user=os.environ.get(SESSION_USER_ENV) or "unknown", token=token)
