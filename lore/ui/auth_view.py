"""Auth View — Login / Sign-Up Screen.

Presents a centred card with email and password fields and a link that
toggles between login and sign-up.  Messages appear inline under the
button, green for success and red for errors.

**Thin UI Rule**: This module contains ZERO business logic.  It
gathers inputs, delegates to ``AuthFormService``, and displays results.
The switch to the profile screen after a successful login is driven by
the session subscription, not by this view.
"""

from __future__ import annotations

import tkinter as tk

import customtkinter as ctk

from lore.logger import StructuredLogger
from lore.models.auth_models import AuthFormOutcome
from lore.models.enums import MessageKind
from lore.services.auth_form import AuthFormService
from lore.ui.dispatch import root_dispatcher
from lore.utils.background import TaskOutcome, run_in_background
from lore.ui.theme import (
    ACCENT_HOVER,
    ACCENT_PRIMARY,
    CARD_BG,
    CARD_BORDER,
    CARD_WIDTH,
    CORNER_RADIUS,
    ERROR_TEXT,
    FONT_BODY,
    FONT_BRAND,
    FONT_BUTTON,
    FONT_HEADING,
    FONT_LABEL,
    FONT_SMALL,
    INPUT_BG,
    INPUT_BORDER,
    PADDING_LG,
    PADDING_MD,
    PADDING_SM,
    PAGE_BG,
    SUCCESS_TEXT,
    TEXT_ON_ACCENT,
    TEXT_PRIMARY,
    TEXT_SECONDARY,
)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
_INPUT_HEIGHT: int = 44
_BUTTON_HEIGHT: int = 48


class AuthView(ctk.CTkFrame):
    """Full-screen login / sign-up frame.

    Parameters
    ----------
    parent:
        The root ``CTk`` window this frame belongs to.
    form:
        Fresh ``AuthFormService`` holding mode and loading state.
    logger:
        Structured JSON logger.
    """

    def __init__(
        self,
        parent: ctk.CTk,
        form: AuthFormService,
        logger: StructuredLogger,
    ) -> None:
        super().__init__(parent, fg_color=PAGE_BG)

        self._form: AuthFormService = form
        self._logger: StructuredLogger = logger
        self._mounted: bool = True
        self._post_to_ui = root_dispatcher(parent, logger)

        self._build_ui()

    # ------------------------------------------------------------------
    # UI Construction
    # ------------------------------------------------------------------

    def _build_ui(self) -> None:
        self.grid_rowconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=0)
        self.grid_rowconfigure(2, weight=1)
        self.grid_columnconfigure(0, weight=1)

        card = ctk.CTkFrame(
            self,
            width=CARD_WIDTH,
            fg_color=CARD_BG,
            corner_radius=16,
            border_width=1,
            border_color=CARD_BORDER,
        )
        card.grid(row=1, column=0)

        inner = ctk.CTkFrame(card, fg_color="transparent")
        inner.pack(fill="both", expand=True, padx=36, pady=28)

        ctk.CTkLabel(
            inner,
            text="Lore",
            font=FONT_BRAND,
            text_color=ACCENT_PRIMARY,
        ).pack(pady=(0, 2))

        self._title_label = ctk.CTkLabel(
            inner,
            text=self._form.title,
            font=FONT_HEADING,
            text_color=TEXT_PRIMARY,
        )
        self._title_label.pack(pady=(0, PADDING_LG))

        # Email
        ctk.CTkLabel(
            inner,
            text="EMAIL ADDRESS",
            font=FONT_LABEL,
            text_color=TEXT_SECONDARY,
            anchor="w",
        ).pack(fill="x", pady=(0, 4))

        self._email_entry = ctk.CTkEntry(
            inner,
            width=CARD_WIDTH - 72,
            placeholder_text="you@example.com",
            font=FONT_BODY,
            fg_color=INPUT_BG,
            border_color=INPUT_BORDER,
            text_color=TEXT_PRIMARY,
            height=_INPUT_HEIGHT,
            corner_radius=CORNER_RADIUS,
        )
        self._email_entry.pack(fill="x", pady=(0, PADDING_MD))

        # Password
        ctk.CTkLabel(
            inner,
            text="PASSWORD",
            font=FONT_LABEL,
            text_color=TEXT_SECONDARY,
            anchor="w",
        ).pack(fill="x", pady=(0, 4))

        self._password_entry = ctk.CTkEntry(
            inner,
            placeholder_text="••••••••",
            font=FONT_BODY,
            fg_color=INPUT_BG,
            border_color=INPUT_BORDER,
            text_color=TEXT_PRIMARY,
            show="*",
            height=_INPUT_HEIGHT,
            corner_radius=CORNER_RADIUS,
        )
        self._password_entry.pack(fill="x", pady=(0, PADDING_LG))
        self._password_entry.bind("<Return>", self._on_enter_key)

        self._submit_button = ctk.CTkButton(
            inner,
            text=self._form.submit_label,
            font=FONT_BUTTON,
            fg_color=ACCENT_PRIMARY,
            hover_color=ACCENT_HOVER,
            text_color=TEXT_ON_ACCENT,
            height=_BUTTON_HEIGHT,
            corner_radius=CORNER_RADIUS,
            command=self._handle_submit,
        )
        self._submit_button.pack(fill="x", pady=(0, PADDING_SM))

        self._message_label = ctk.CTkLabel(
            inner,
            text="",
            font=FONT_SMALL,
            text_color=ERROR_TEXT,
            wraplength=CARD_WIDTH - 100,
        )
        self._message_label.pack(fill="x")
        self._message_label.pack_forget()

        self._toggle_button = ctk.CTkButton(
            inner,
            text=self._form.toggle_label,
            font=FONT_SMALL,
            fg_color="transparent",
            hover_color=CARD_BG,
            text_color=ACCENT_PRIMARY,
            command=self._handle_toggle,
        )
        self._toggle_button.pack(pady=(PADDING_SM, 0))

        self._email_entry.focus_set()

    # ------------------------------------------------------------------
    # Mode toggle
    # ------------------------------------------------------------------

    def _handle_toggle(self) -> None:
        """Switch login ↔ sign-up.  Entries are left as typed."""
        self._form.toggle_mode()
        self._clear_message()
        self._refresh_labels()

    def _refresh_labels(self) -> None:
        self._title_label.configure(text=self._form.title)
        self._submit_button.configure(text=self._form.submit_label)
        self._toggle_button.configure(text=self._form.toggle_label)

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    def _on_enter_key(self, event: tk.Event[tk.Misc]) -> None:
        self._handle_submit()

    def _handle_submit(self) -> None:
        email = self._email_entry.get()
        password = self._password_entry.get()

        invalid = self._form.validate(email, password)
        if invalid is not None:
            self._show_outcome(invalid)
            return
        if not self._form.begin_submit():
            return

        self._clear_message()
        self._set_loading(True)
        mode = self._form.mode
        run_in_background(
            "auth-submit",
            lambda: self._form.submit(email, password, mode),
            self._finish_submit,
            self._post_to_ui,
            self._logger,
        )

    def _finish_submit(self, task: TaskOutcome[AuthFormOutcome]) -> None:
        """Main-thread half of a submission; runs even if this view is gone."""
        self._form.finish_submit()
        if not self._mounted:
            return
        outcome = task.value
        if outcome is None:
            outcome = AuthFormOutcome(kind=MessageKind.ERROR, message=str(task.error))
        self._set_loading(False)
        if outcome.clear_fields:
            self._email_entry.delete(0, "end")
            self._password_entry.delete(0, "end")
        self._show_outcome(outcome)

    # ------------------------------------------------------------------
    # Message helpers
    # ------------------------------------------------------------------

    def _show_outcome(self, outcome: AuthFormOutcome) -> None:
        colour = SUCCESS_TEXT if outcome.kind == MessageKind.SUCCESS else ERROR_TEXT
        self._message_label.configure(text=outcome.message, text_color=colour)
        self._message_label.pack(fill="x", before=self._toggle_button)

    def _clear_message(self) -> None:
        self._message_label.configure(text="")
        self._message_label.pack_forget()

    def _set_loading(self, loading: bool) -> None:
        state = "disabled" if loading else "normal"
        self._submit_button.configure(state=state, text=self._form.submit_label)
        self._toggle_button.configure(state=state)

    def destroy(self) -> None:
        self._mounted = False
        super().destroy()
