from __future__ import annotations

"""
Data Models Package.

Re-exports all Pydantic models for convenient imports:
    from lore.models import Session, Profile, ChatMessage
    from lore.models import ViewName, AuthMode, Sender
"""

from lore.models.analysis import AnalysisOutcome, AnalysisTicket
from lore.models.auth_models import AuthErrorCode, AuthFormOutcome, AuthResult
from lore.models.chat import ChatMessage
from lore.models.enums import AuthMode, MessageKind, Sender, ViewName
from lore.models.profile import AvatarUploadResult, Profile, ProfileSaveResult
from lore.models.session import Session, SessionChange

__all__ = [
    "AnalysisOutcome",
    "AnalysisTicket",
    "AuthErrorCode",
    "AuthFormOutcome",
    "AuthMode",
    "AuthResult",
    "AvatarUploadResult",
    "ChatMessage",
    "MessageKind",
    "Profile",
    "ProfileSaveResult",
    "Sender",
    "Session",
    "SessionChange",
    "ViewName",
]
