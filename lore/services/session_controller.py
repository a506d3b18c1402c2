"""
Session Controller.

Owns the auth-state subscription for the lifetime of the application
window and feeds every notification into ``SessionContext``, which
is the single source of truth for "is a user authenticated".

Supabase delivers notifications on the thread that made the auth call.
The controller therefore hands each change to an injected ``dispatch``
callable; the window binds it to ``after(0, ...)`` so that the context,
and every listener it notifies, only ever runs on the Tk main thread.
"""

from __future__ import annotations

import threading
from types import TracebackType
from typing import Callable, Optional

from lore.auth import SessionContext
from lore.logger import StructuredLogger
from lore.models.enums import ViewName
from lore.models.session import SessionChange
from lore.services.auth_service import AuthService, AuthSubscription

Dispatcher = Callable[[Callable[[], None]], None]


def _run_inline(fn: Callable[[], None]) -> None:
    fn()


class SessionController:
    """Scoped owner of the auth-state subscription.

    ``start()`` reads the current session and subscribes; ``stop()``
    unsubscribes.  Used as a context manager the subscription can never
    outlive the block::

        with SessionController(auth, context, logger, dispatch=...):
            window.mainloop()

    Parameters
    ----------
    auth_service:
        Source of the initial session and of change notifications.
    context:
        The session context this controller is the only writer of.
    logger:
        Structured logger instance.
    dispatch:
        Schedules a zero-argument callable on the UI thread.  Defaults to
        running it inline, which is what tests use.
    """

    def __init__(
        self,
        auth_service: AuthService,
        context: SessionContext,
        logger: StructuredLogger,
        dispatch: Optional[Dispatcher] = None,
    ) -> None:
        self._auth_service = auth_service
        self._context = context
        self._logger = logger
        self._dispatch: Dispatcher = dispatch or _run_inline
        self._subscription: Optional[AuthSubscription] = None
        self._lock: threading.Lock = threading.Lock()

    @property
    def context(self) -> SessionContext:
        return self._context

    @property
    def is_subscribed(self) -> bool:
        with self._lock:
            return self._subscription is not None

    @property
    def view(self) -> ViewName:
        return self._context.view

    def request_auth(self) -> None:
        """User asked to sign in: set the latch on the context."""
        self._context.request_auth()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Load the current session and subscribe.  No-op if started."""
        with self._lock:
            if self._subscription is not None:
                return

        try:
            session = self._auth_service.get_session()
        except Exception as exc:
            self._logger.warning(
                "Could not restore session; starting signed out: %s", exc,
                exc_info=True,
            )
            session = None
        self._context.apply(SessionChange(event="INITIAL_SESSION", session=session))

        subscription = self._auth_service.subscribe(self._on_session_change)
        with self._lock:
            self._subscription = subscription
        self._logger.info(
            "Session controller started (%s).",
            "signed in" if session else "signed out",
        )

    def stop(self) -> None:
        """Unsubscribe from auth-state changes.  Safe to call repeatedly."""
        with self._lock:
            subscription, self._subscription = self._subscription, None
        if subscription is None:
            return
        try:
            subscription.unsubscribe()
        except Exception as exc:
            self._logger.warning("Auth unsubscribe failed: %s", exc)
        self._logger.info("Session controller stopped.")

    def __enter__(self) -> "SessionController":
        self.start()
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.stop()

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def _on_session_change(self, change: SessionChange) -> None:
        """SDK callback; may run on a worker thread."""
        if not self.is_subscribed:
            return
        self._logger.info(
            "Auth state changed: %s", change.event,
            extra={"event": change.event},
        )
        self._dispatch(lambda: self._apply_if_subscribed(change))

    def _apply_if_subscribed(self, change: SessionChange) -> None:
        # A change queued before stop() must not reach a torn-down view.
        if self.is_subscribed:
            self._context.apply(change)
