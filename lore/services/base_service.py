"""
Base Service Class.

Every Lore service (auth, the auth form, the profile editor, Gemini,
the chat conversation and the image analyzer) takes its logger through
the constructor; collaborators are added by each subclass.
"""

from __future__ import annotations

from lore.logger import StructuredLogger


class BaseService:
    """Holds the injected logger as ``self._logger``."""

    def __init__(self, logger: StructuredLogger) -> None:
        self._logger: StructuredLogger = logger
