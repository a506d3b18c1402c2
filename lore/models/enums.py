"""
Shared Enumerations for Lore Models.

All string enumerations for type-safe field constraints.
StrEnum values compare equal to their string equivalents.
"""

from __future__ import annotations
from enum import StrEnum


class ViewName(StrEnum):
    """Top-level screens the application shell can show."""

    MARKETING = "MARKETING"
    AUTH = "AUTH"
    PROFILE = "PROFILE"


class AuthMode(StrEnum):
    """Which endpoint the auth form submits to."""

    LOGIN = "LOGIN"
    SIGNUP = "SIGNUP"


class MessageKind(StrEnum):
    """Colour class of an inline form message."""

    SUCCESS = "SUCCESS"
    ERROR = "ERROR"


class Sender(StrEnum):
    """Author of a chat transcript entry."""

    USER = "USER"
    BOT = "BOT"
