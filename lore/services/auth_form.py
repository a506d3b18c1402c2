"""
Auth Form Service.

UI-free state of the login / sign-up form: the current mode, the
loading guard, and the mapping from an ``AuthResult`` to the message
the form shows.  ``AuthView`` only reads entries and renders outcomes.

Submission protocol (main thread → worker → main thread)::

    if form.begin_submit():             # main thread; False while loading
        outcome = form.submit(e, p, m)  # worker thread; remote call
        form.finish_submit()            # main thread
"""

from __future__ import annotations

import threading
from typing import Optional

from lore.logger import StructuredLogger
from lore.models.auth_models import AuthFormOutcome
from lore.models.enums import AuthMode, MessageKind
from lore.services.auth_service import AuthService
from lore.services.base_service import BaseService

LOGIN_SUCCESS_MESSAGE: str = "Logged in successfully!"
SIGNUP_SUCCESS_MESSAGE: str = "Please check your email for verification!"
MISSING_FIELDS_MESSAGE: str = "Please enter email and password."


class AuthFormService(BaseService):
    """Mode, loading state and outcome mapping for the auth form.

    Parameters
    ----------
    auth_service:
        Performs the actual sign-in / sign-up calls.
    logger:
        Structured logger instance.
    """

    def __init__(self, auth_service: AuthService, logger: StructuredLogger) -> None:
        super().__init__(logger)
        self._auth_service = auth_service
        self._mode: AuthMode = AuthMode.LOGIN
        self._loading: bool = False
        self._lock: threading.Lock = threading.Lock()

    # ------------------------------------------------------------------
    # Mode
    # ------------------------------------------------------------------

    @property
    def mode(self) -> AuthMode:
        return self._mode

    def toggle_mode(self) -> AuthMode:
        """Switch between login and sign-up.  Field contents are untouched."""
        self._mode = AuthMode.SIGNUP if self._mode == AuthMode.LOGIN else AuthMode.LOGIN
        return self._mode

    @property
    def title(self) -> str:
        return "Login" if self._mode == AuthMode.LOGIN else "Sign Up"

    @property
    def submit_label(self) -> str:
        if self._loading:
            return "Loading..."
        return self.title

    @property
    def toggle_label(self) -> str:
        if self._mode == AuthMode.LOGIN:
            return "Don't have an account? Sign Up"
        return "Already have an account? Login"

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    @property
    def loading(self) -> bool:
        with self._lock:
            return self._loading

    def begin_submit(self) -> bool:
        """Enter the loading state; ``False`` if a submit is in flight."""
        with self._lock:
            if self._loading:
                return False
            self._loading = True
            return True

    def finish_submit(self) -> None:
        with self._lock:
            self._loading = False

    @staticmethod
    def validate(email: str, password: str) -> Optional[AuthFormOutcome]:
        """Local check for empty fields; ``None`` when the form may be sent."""
        if not email.strip() or not password:
            return AuthFormOutcome(kind=MessageKind.ERROR, message=MISSING_FIELDS_MESSAGE)
        return None

    def submit(
        self,
        email: str,
        password: str,
        mode: Optional[AuthMode] = None,
    ) -> AuthFormOutcome:
        """Send the credentials to the endpoint selected by *mode*.

        Exactly one remote call is made.  On failure the remote message
        is returned unmodified and the fields are kept.
        """
        invalid = self.validate(email, password)
        if invalid is not None:
            return invalid

        resolved_mode = mode or self._mode
        if resolved_mode == AuthMode.LOGIN:
            result = self._auth_service.login(email, password)
            success_message = LOGIN_SUCCESS_MESSAGE
        else:
            result = self._auth_service.register(email, password)
            success_message = SIGNUP_SUCCESS_MESSAGE

        if not result.success:
            return AuthFormOutcome(
                kind=MessageKind.ERROR,
                message=result.error_message or "",
            )
        return AuthFormOutcome(
            kind=MessageKind.SUCCESS,
            message=success_message,
            clear_fields=True,
        )
