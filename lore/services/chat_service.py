"""
Chat Conversation Service.

UI-free state of one mounted LoreBot widget: the open/closed panel
state, the in-memory transcript, the single-flight loading flag and
the lazily created Gemini chat session.

A turn is split across threads the same way every remote call in the
UI is::

    text = convo.begin_turn(raw)       # main thread; None means ignored
    if text is not None:
        reply = convo.fetch_reply(text)   # worker thread
        convo.finish_turn(reply)          # main thread

While a turn is outstanding further ``begin_turn`` calls are ignored,
not queued.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Callable, Optional, Union

from google.genai.chats import Chat

from lore.logger import StructuredLogger
from lore.models.chat import ChatMessage
from lore.models.enums import Sender
from lore.services.base_service import BaseService
from lore.services.gemini_service import CHAT_FALLBACK_REPLY, GeminiService

CHAT_GREETING: str = (
    "Hi! I'm LoreBot. How can I help you learn about the Lore platform today?"
)

TranscriptListener = Callable[[tuple[ChatMessage, ...]], None]


@dataclass(frozen=True)
class NotStarted:
    """No chat session has been opened for this widget yet."""


@dataclass(frozen=True)
class Active:
    """The widget's chat session, reused for every turn."""

    handle: Chat


ChatSessionState = Union[NotStarted, Active]


class ChatConversation(BaseService):
    """Transcript, loading flag and chat session for one widget mount.

    Parameters
    ----------
    gemini:
        Creates the chat session and sends turns through it.
    logger:
        Structured logger instance.
    """

    def __init__(self, gemini: GeminiService, logger: StructuredLogger) -> None:
        super().__init__(logger)
        self._gemini = gemini
        self._messages: list[ChatMessage] = [
            ChatMessage(sender=Sender.BOT, text=CHAT_GREETING)
        ]
        self._is_open: bool = False
        self._loading: bool = False
        self._state: ChatSessionState = NotStarted()
        self._lock: threading.Lock = threading.Lock()
        self._listeners: list[TranscriptListener] = []

    # ------------------------------------------------------------------
    # Panel state
    # ------------------------------------------------------------------

    @property
    def is_open(self) -> bool:
        return self._is_open

    def toggle(self) -> bool:
        self._is_open = not self._is_open
        return self._is_open

    def close(self) -> None:
        self._is_open = False

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    @property
    def session_state(self) -> ChatSessionState:
        return self._state

    def ensure_session(self) -> Chat:
        """Return the chat session, creating it on first use only."""
        with self._lock:
            if isinstance(self._state, NotStarted):
                self._state = Active(handle=self._gemini.create_chat())
            return self._state.handle

    # ------------------------------------------------------------------
    # Transcript
    # ------------------------------------------------------------------

    @property
    def messages(self) -> tuple[ChatMessage, ...]:
        with self._lock:
            return tuple(self._messages)

    @property
    def loading(self) -> bool:
        with self._lock:
            return self._loading

    def can_send(self, text: str) -> bool:
        return bool(text.strip()) and not self.loading

    def begin_turn(self, text: str) -> Optional[str]:
        """Append the user's entry and enter the loading state.

        Returns the text to forward, or ``None`` when *text* is blank or
        a turn is already outstanding (the call is then a no-op).
        """
        with self._lock:
            if not text.strip() or self._loading:
                return None
            self._messages.append(ChatMessage(sender=Sender.USER, text=text))
            self._loading = True
        self._notify()
        return text

    def fetch_reply(self, text: str) -> str:
        """Send *text* through the session.  Never raises."""
        try:
            chat = self.ensure_session()
        except Exception as exc:
            self._logger.warning("Could not open chat session: %s", exc, exc_info=True)
            return CHAT_FALLBACK_REPLY
        return self._gemini.continue_chat(chat, text)

    def finish_turn(self, reply: str) -> ChatMessage:
        """Append the bot's reply and leave the loading state."""
        message = ChatMessage(sender=Sender.BOT, text=reply)
        with self._lock:
            self._messages.append(message)
            self._loading = False
        self._notify()
        return message

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def add_listener(self, listener: TranscriptListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: TranscriptListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        snapshot = self.messages
        for listener in list(self._listeners):
            listener(snapshot)
