"""Chat Widget Component.

Floating LoreBot launcher and chat panel pinned to the bottom-right of
the marketing page.  The transcript auto-scrolls to the newest entry,
shows a typing indicator while a reply is outstanding, and sends on
Enter.

**Thin UI Rule**: No business logic — transcript, open state and the
single-flight guard all live in ``ChatConversation``.
"""

from __future__ import annotations

import threading
import tkinter as tk

import customtkinter as ctk

from lore.logger import StructuredLogger
from lore.models.chat import ChatMessage
from lore.models.enums import Sender
from lore.services.chat_service import ChatConversation
from lore.ui.dispatch import root_dispatcher
from lore.ui.theme import (
    ACCENT_HOVER,
    ACCENT_PRIMARY,
    BUBBLE_BOT_BG,
    BUBBLE_USER_BG,
    CARD_BORDER,
    CHAT_PANEL_HEIGHT,
    CHAT_PANEL_WIDTH,
    CORNER_RADIUS,
    FONT_BODY,
    FONT_BUTTON,
    FONT_CARD_TITLE,
    FONT_ICON_LG,
    HEADER_BG,
    INPUT_BG,
    INPUT_BORDER,
    PADDING_MD,
    PADDING_SM,
    SECTION_BG,
    TEXT_ON_ACCENT,
    TEXT_PRIMARY,
    TEXT_SECONDARY,
)

_LAUNCHER_SIZE: int = 56
_TYPING_TEXT: str = "LoreBot is typing…"


class ChatWidget(ctk.CTkFrame):
    """Launcher button plus a toggleable chat panel.

    Parameters
    ----------
    parent:
        Frame the widget is placed on (bottom-right corner).
    conversation:
        Fresh ``ChatConversation`` for this mount.
    logger:
        Structured logger instance.
    """

    def __init__(
        self,
        parent: ctk.CTkFrame,
        conversation: ChatConversation,
        logger: StructuredLogger,
    ) -> None:
        super().__init__(parent, fg_color="transparent")

        self._conversation = conversation
        self._logger = logger
        self._mounted: bool = True
        self._post_to_ui = root_dispatcher(parent, logger)

        self._panel = ctk.CTkFrame(
            self,
            width=CHAT_PANEL_WIDTH,
            height=CHAT_PANEL_HEIGHT,
            fg_color=SECTION_BG,
            corner_radius=16,
            border_width=1,
            border_color=CARD_BORDER,
        )
        self._panel.pack_propagate(False)
        self._build_panel()

        self._launcher = ctk.CTkButton(
            self,
            text="\U0001F4AC",
            font=FONT_ICON_LG,
            width=_LAUNCHER_SIZE,
            height=_LAUNCHER_SIZE,
            corner_radius=_LAUNCHER_SIZE // 2,
            fg_color=ACCENT_PRIMARY,
            hover_color=ACCENT_HOVER,
            text_color=TEXT_ON_ACCENT,
            command=self._toggle,
        )
        self._launcher.pack(side="bottom", anchor="e")

        self._conversation.add_listener(self._on_transcript_changed)
        self._render_transcript(self._conversation.messages)

    # ------------------------------------------------------------------
    # UI Construction
    # ------------------------------------------------------------------

    def _build_panel(self) -> None:
        header = ctk.CTkFrame(self._panel, fg_color=HEADER_BG, corner_radius=0, height=48)
        header.pack(fill="x")
        header.pack_propagate(False)

        ctk.CTkLabel(
            header,
            text="LoreBot",
            font=FONT_CARD_TITLE,
            text_color=TEXT_PRIMARY,
        ).pack(side="left", padx=PADDING_MD)

        ctk.CTkButton(
            header,
            text="✕",
            width=32,
            fg_color="transparent",
            hover_color=SECTION_BG,
            text_color=TEXT_SECONDARY,
            command=self._close,
        ).pack(side="right", padx=PADDING_SM)

        self._transcript = ctk.CTkTextbox(
            self._panel,
            font=FONT_BODY,
            fg_color=SECTION_BG,
            text_color=TEXT_PRIMARY,
            wrap="word",
            activate_scrollbars=True,
        )
        self._transcript.pack(fill="both", expand=True, padx=PADDING_SM, pady=PADDING_SM)
        self._transcript.tag_config("user", justify="right", background=BUBBLE_USER_BG)
        self._transcript.tag_config("bot", justify="left", background=BUBBLE_BOT_BG)
        self._transcript.tag_config("typing", foreground=TEXT_SECONDARY)
        self._transcript.configure(state="disabled")

        input_row = ctk.CTkFrame(self._panel, fg_color="transparent")
        input_row.pack(fill="x", padx=PADDING_SM, pady=(0, PADDING_SM))

        self._input = ctk.CTkEntry(
            input_row,
            placeholder_text="Ask about Lore...",
            font=FONT_BODY,
            fg_color=INPUT_BG,
            border_color=INPUT_BORDER,
            text_color=TEXT_PRIMARY,
            height=40,
            corner_radius=CORNER_RADIUS,
        )
        self._input.pack(side="left", fill="x", expand=True, padx=(0, PADDING_SM))
        self._input.bind("<Return>", self._on_enter_key)
        self._input.bind("<KeyRelease>", lambda _event: self._refresh_controls())

        self._send_button = ctk.CTkButton(
            input_row,
            text="Send",
            font=FONT_BUTTON,
            width=72,
            height=40,
            fg_color=ACCENT_PRIMARY,
            hover_color=ACCENT_HOVER,
            text_color=TEXT_ON_ACCENT,
            corner_radius=CORNER_RADIUS,
            command=self._handle_send,
        )
        self._send_button.pack(side="right")
        self._refresh_controls()

    # ------------------------------------------------------------------
    # Open / close
    # ------------------------------------------------------------------

    def _toggle(self) -> None:
        if self._conversation.toggle():
            self._panel.pack(side="top", pady=(0, PADDING_SM), before=self._launcher)
            self._input.focus_set()
        else:
            self._panel.pack_forget()

    def _close(self) -> None:
        self._conversation.close()
        self._panel.pack_forget()

    # ------------------------------------------------------------------
    # Sending
    # ------------------------------------------------------------------

    def _on_enter_key(self, event: tk.Event[tk.Misc]) -> None:
        self._handle_send()

    def _handle_send(self) -> None:
        text = self._conversation.begin_turn(self._input.get())
        if text is None:
            return
        self._input.delete(0, "end")
        self._refresh_controls()

        threading.Thread(
            target=self._fetch_reply,
            args=(text,),
            name="chat-turn",
            daemon=True,
        ).start()

    def _fetch_reply(self, text: str) -> None:
        """Run the remote turn on a worker thread.

        ``fetch_reply`` never raises; the result (real answer or apology)
        is handed back through the root window so a closed widget cannot
        break delivery.
        """
        reply = self._conversation.fetch_reply(text)
        self._post_to_ui(lambda: self._finish_turn(reply))

    def _finish_turn(self, reply: str) -> None:
        if not self._mounted:
            return
        self._conversation.finish_turn(reply)
        self._refresh_controls()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _on_transcript_changed(self, messages: tuple[ChatMessage, ...]) -> None:
        if self._mounted:
            self._render_transcript(messages)

    def _render_transcript(self, messages: tuple[ChatMessage, ...]) -> None:
        self._transcript.configure(state="normal")
        self._transcript.delete("1.0", "end")
        for message in messages:
            tag = "user" if message.sender == Sender.USER else "bot"
            self._transcript.insert("end", f" {message.text} \n\n", tag)
        if self._conversation.loading:
            self._transcript.insert("end", _TYPING_TEXT, "typing")
        self._transcript.configure(state="disabled")
        self._transcript.see("end")

    def _refresh_controls(self) -> None:
        loading = self._conversation.loading
        self._input.configure(state="disabled" if loading else "normal")
        can_send = self._conversation.can_send(self._input.get())
        self._send_button.configure(state="normal" if can_send else "disabled")

    # ------------------------------------------------------------------
    # Teardown
    # ------------------------------------------------------------------

    def destroy(self) -> None:
        self._mounted = False
        self._conversation.remove_listener(self._on_transcript_changed)
        super().destroy()
