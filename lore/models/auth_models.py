"""
Authentication Pipeline Models.

Pydantic models and enumerations for the auth request/response
contracts between ``AuthService``, ``AuthFormService`` and the UI layer.
Every auth operation returns a structured, inspectable result rather
than raw strings or exception side-channels.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Optional

from pydantic import BaseModel

from lore.models.enums import MessageKind
from lore.models.session import Session


# ---------------------------------------------------------------------------
# Error classification
# ---------------------------------------------------------------------------

class AuthErrorCode(StrEnum):
    """Authentication error categories.

    Used for logging only; the user always sees the remote message.
    """

    INVALID_CREDENTIALS = "invalid_credentials"
    EMAIL_ALREADY_EXISTS = "email_already_exists"
    WEAK_PASSWORD = "weak_password"
    EMAIL_NOT_CONFIRMED = "email_not_confirmed"
    NETWORK_ERROR = "network_error"
    UNKNOWN_ERROR = "unknown_error"


# Substrings of Supabase error codes/messages → category.
SUPABASE_ERROR_MAP: dict[str, AuthErrorCode] = {
    "invalid_credentials": AuthErrorCode.INVALID_CREDENTIALS,
    "invalid login credentials": AuthErrorCode.INVALID_CREDENTIALS,
    "invalid_grant": AuthErrorCode.INVALID_CREDENTIALS,
    "user_already_exists": AuthErrorCode.EMAIL_ALREADY_EXISTS,
    "already registered": AuthErrorCode.EMAIL_ALREADY_EXISTS,
    "weak_password": AuthErrorCode.WEAK_PASSWORD,
    "email_not_confirmed": AuthErrorCode.EMAIL_NOT_CONFIRMED,
    "email not confirmed": AuthErrorCode.EMAIL_NOT_CONFIRMED,
}

NETWORK_ERROR_MESSAGE: str = "Cannot reach the server. Check your internet connection."


# ---------------------------------------------------------------------------
# Unified auth response
# ---------------------------------------------------------------------------

class AuthResult(BaseModel):
    """Unified response for login, registration and logout.

    Attributes
    ----------
    success:
        ``True`` when the remote call completed without error.
    error_code:
        Structured error category (``None`` on success).
    error_message:
        The remote service's message, verbatim (``None`` on success).
    user_id:
        Supabase UUID of the authenticated / registered user, if known.
    email:
        Email address the call was made for.
    session:
        The new session for a successful password sign-in.  Sign-up
        leaves it ``None`` until the address is verified.
    """

    success: bool
    error_code: Optional[AuthErrorCode] = None
    error_message: Optional[str] = None
    user_id: Optional[str] = None
    email: Optional[str] = None
    session: Optional[Session] = None


class AuthFormOutcome(BaseModel):
    """What the auth form should display after one submission."""

    kind: MessageKind
    message: str
    clear_fields: bool = False
