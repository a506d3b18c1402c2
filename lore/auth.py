"""
Authentication & Session State.

Provides the injectable ``SessionContext`` that holds the current
Supabase session and the "show auth" latch for the lifetime of the
application window, and the pure ``resolve_view`` rendering rule.

Usage::

    from lore.auth import SessionContext
    from lore.models.session import SessionChange

    context = SessionContext()
    context.add_listener(lambda view: print("now showing", view))
    context.apply(SessionChange(event="SIGNED_IN", session=session))
"""

from __future__ import annotations

import threading
from typing import Callable, Optional

from lore.models.enums import ViewName
from lore.models.session import Session, SessionChange

ViewListener = Callable[[ViewName], None]


def resolve_view(session: Optional[Session], show_auth: bool) -> ViewName:
    """Return the screen for (*session*, *show_auth*).

    A present session always wins over the latch.
    """
    if session is not None:
        return ViewName.PROFILE
    if show_auth:
        return ViewName.AUTH
    return ViewName.MARKETING


class SessionContext:
    """Injectable holder for the current session and the auth latch.

    ``apply()`` is the only writer of the session and is fed exclusively
    by ``SessionController``; ``request_auth()`` is the only writer of
    the latch, which is never reset.  Listeners are notified with the
    new ``ViewName`` whenever the resolved view changes.
    """

    def __init__(self) -> None:
        self._lock: threading.RLock = threading.RLock()
        self._session: Optional[Session] = None
        self._show_auth: bool = False
        self._listeners: list[ViewListener] = []

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def session(self) -> Optional[Session]:
        with self._lock:
            return self._session

    @property
    def show_auth(self) -> bool:
        with self._lock:
            return self._show_auth

    @property
    def view(self) -> ViewName:
        with self._lock:
            return resolve_view(self._session, self._show_auth)

    def require_session(self) -> Session:
        """Return the current session.

        Raises:
            RuntimeError: If no user is currently authenticated.
        """
        with self._lock:
            if self._session is None:
                raise RuntimeError(
                    "No user is currently authenticated. Login required."
                )
            return self._session

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def apply(self, change: SessionChange) -> None:
        """Record the session carried by an auth-state notification."""
        with self._lock:
            before = resolve_view(self._session, self._show_auth)
            self._session = change.session
            after = resolve_view(self._session, self._show_auth)
        if after != before:
            self._notify(after)

    def request_auth(self) -> None:
        """Set the one-way "show auth" latch."""
        with self._lock:
            before = resolve_view(self._session, self._show_auth)
            self._show_auth = True
            after = resolve_view(self._session, self._show_auth)
        if after != before:
            self._notify(after)

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def add_listener(self, listener: ViewListener) -> None:
        with self._lock:
            if listener not in self._listeners:
                self._listeners.append(listener)

    def remove_listener(self, listener: ViewListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def _notify(self, view: ViewName) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            listener(view)
