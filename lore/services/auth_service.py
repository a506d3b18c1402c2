"""
Authentication Service.

Single orchestrator for every Supabase auth call made by the
application: reading the current session, subscribing to auth-state
changes, password sign-in, registration and sign-out.

Sits between the UI layer and the Supabase client so that the auth
form and the profile editor never touch the SDK directly.  All
mutating methods return typed ``AuthResult`` models; the remote error
message is preserved verbatim for display.
"""

from __future__ import annotations

from typing import Callable, Optional, Protocol

from lore.database import DatabaseManager
from lore.logger import StructuredLogger
from lore.models.auth_models import (
    NETWORK_ERROR_MESSAGE,
    SUPABASE_ERROR_MAP,
    AuthErrorCode,
    AuthResult,
)
from lore.models.session import Session, SessionChange
from lore.services.base_service import BaseService
from lore.utils.audit import log_audit_event


class AuthSubscription(Protocol):
    """Handle returned by ``on_auth_state_change``."""

    def unsubscribe(self) -> None: ...  # noqa: E704


class AuthService(BaseService):
    """Centralised authentication service.

    Parameters
    ----------
    db:
        Holder of the Supabase client.
    logger:
        Structured JSON logger for audit-grade logging.
    """

    def __init__(self, db: DatabaseManager, logger: StructuredLogger) -> None:
        super().__init__(logger)
        self._db: DatabaseManager = db

    @staticmethod
    def normalize_email(email: str) -> str:
        """Normalise an email address: strip whitespace and lowercase."""
        return email.strip().lower()

    # ==================================================================
    # Session
    # ==================================================================

    def get_session(self) -> Optional[Session]:
        """Return the persisted session, refreshed by the SDK if needed.

        Remote errors propagate; the session controller decides how to
        treat them.
        """
        raw = self._db.supabase.auth.get_session()
        return Session.from_supabase(raw)

    def subscribe(self, callback: Callable[[SessionChange], None]) -> AuthSubscription:
        """Register *callback* for auth-state changes.

        The SDK invokes listeners on whichever thread performed the auth
        call, so *callback* must not touch widgets directly.  The caller
        owns the returned subscription and must ``unsubscribe()`` it.
        """
        def _on_auth_state_change(event: object, raw_session: object) -> None:
            callback(
                SessionChange(
                    event=str(getattr(event, "value", event)),
                    session=Session.from_supabase(raw_session),
                )
            )

        return self._db.supabase.auth.on_auth_state_change(_on_auth_state_change)

    # ==================================================================
    # Login
    # ==================================================================

    def login(self, email: str, password: str) -> AuthResult:
        """Password sign-in via ``sign_in_with_password``.

        The resulting session reaches the rest of the application through
        the auth-state subscription, not through this return value.
        """
        email = self.normalize_email(email)
        try:
            response = self._db.supabase.auth.sign_in_with_password({
                "email": email,
                "password": password,
            })
        except Exception as exc:
            return self._classify_error(exc, email, event="LOGIN_FAILED")

        session = Session.from_supabase(getattr(response, "session", None))
        user = getattr(response, "user", None)
        user_id = str(user.id) if user is not None else (
            session.user_id if session else None
        )

        log_audit_event(
            self._logger,
            action="LOGIN",
            entity_type="auth",
            entity_id=user_id or email,
            user_id=user_id or "unknown",
            details={"email": email},
        )
        return AuthResult(success=True, user_id=user_id, email=email, session=session)

    # ==================================================================
    # Registration
    # ==================================================================

    def register(self, email: str, password: str) -> AuthResult:
        """Create an account via ``sign_up``.

        Success means a verification email is pending; no session is
        established until the address is confirmed.
        """
        email = self.normalize_email(email)
        try:
            response = self._db.supabase.auth.sign_up({
                "email": email,
                "password": password,
            })
        except Exception as exc:
            return self._classify_error(exc, email, event="REGISTER_FAILED")

        user = getattr(response, "user", None)
        user_id = str(user.id) if user is not None else None

        log_audit_event(
            self._logger,
            action="REGISTER",
            entity_type="auth",
            entity_id=user_id or email,
            user_id=user_id or "unknown",
            details={"email": email},
        )
        return AuthResult(success=True, user_id=user_id, email=email)

    # ==================================================================
    # Logout
    # ==================================================================

    def logout(self, user_id: str = "unknown") -> AuthResult:
        """Server-side sign-out.

        The view change happens when the resulting ``SIGNED_OUT``
        notification reaches the session controller.
        """
        try:
            self._db.supabase.auth.sign_out()
        except Exception as exc:
            self._logger.warning(
                "Server-side sign_out failed for %s: %s", user_id, exc,
                exc_info=True,
            )
            return AuthResult(
                success=False,
                error_code=AuthErrorCode.UNKNOWN_ERROR,
                error_message=self._remote_message(exc),
                user_id=user_id,
            )

        log_audit_event(
            self._logger,
            action="LOGOUT",
            entity_type="auth",
            entity_id=user_id,
            user_id=user_id,
        )
        return AuthResult(success=True, user_id=user_id)

    # ==================================================================
    # Error mapping
    # ==================================================================

    @staticmethod
    def _remote_message(exc: Exception) -> str:
        """The service's own message for *exc*, or a generic network one."""
        if isinstance(exc, (ConnectionError, TimeoutError)):
            return NETWORK_ERROR_MESSAGE
        message = getattr(exc, "message", None) or str(exc)
        return message if message.strip() else NETWORK_ERROR_MESSAGE

    def _classify_error(self, exc: Exception, email: str, *, event: str) -> AuthResult:
        """Map a Supabase or network exception to an ``AuthResult``.

        The code is inferred for the log; the message is passed through
        unchanged.
        """
        message = self._remote_message(exc)
        if message == NETWORK_ERROR_MESSAGE:
            error_code = AuthErrorCode.NETWORK_ERROR
        else:
            haystack = f"{getattr(exc, 'code', '') or ''} {message}".lower()
            error_code = next(
                (code for key, code in SUPABASE_ERROR_MAP.items() if key in haystack),
                AuthErrorCode.UNKNOWN_ERROR,
            )

        self._logger.error(
            "Auth error (%s) for %s: %s", error_code, email, exc,
            extra={"event": event, "error_code": str(error_code)},
        )
        return AuthResult(
            success=False,
            error_code=error_code,
            error_message=message,
            email=email,
        )
