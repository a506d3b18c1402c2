"""
Session Models.

Pydantic projection of a Supabase auth session.  Only the fields the
application reads are kept; the raw SDK object never leaves
``AuthService``.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class Session(BaseModel):
    """An authenticated identity: opaque tokens plus denormalised user data."""

    access_token: str
    refresh_token: Optional[str] = None
    expires_at: Optional[int] = None
    user_id: str
    email: str = ""

    model_config = {"frozen": True}

    @classmethod
    def from_supabase(cls, raw: object) -> Optional["Session"]:
        """Build a ``Session`` from a ``supabase_auth`` session object.

        Returns ``None`` for a missing session or one without a user.
        """
        if raw is None:
            return None
        user = getattr(raw, "user", None)
        if user is None:
            return None
        return cls(
            access_token=getattr(raw, "access_token", ""),
            refresh_token=getattr(raw, "refresh_token", None),
            expires_at=getattr(raw, "expires_at", None),
            user_id=str(user.id),
            email=getattr(user, "email", None) or "",
        )


class SessionChange(BaseModel):
    """One auth-state notification, e.g. ``SIGNED_IN`` or ``SIGNED_OUT``."""

    event: str
    session: Optional[Session] = None

    model_config = {"frozen": True}
