"""Image Analyzer Panel.

"Bring your photos to life" section of the marketing page: the visitor
picks a photo, sees a preview, and receives an AI description of it.

Validation errors and analysis failures are shown inline under the
preview.  Only the result of the most recent selection is ever
displayed; replies to superseded selections are dropped.
"""

from __future__ import annotations

import threading
from pathlib import Path
from tkinter import filedialog
from typing import Optional

import customtkinter as ctk
from PIL import Image, UnidentifiedImageError

from lore.logger import StructuredLogger
from lore.models.analysis import AnalysisOutcome, AnalysisTicket
from lore.services.image_analysis import ImageAnalyzerService
from lore.ui.dispatch import root_dispatcher
from lore.ui.theme import (
    ACCENT_HOVER,
    ACCENT_PRIMARY,
    CARD_BG,
    CARD_BORDER,
    CORNER_RADIUS,
    ERROR_TEXT,
    FONT_BODY,
    FONT_BUTTON,
    FONT_HEADING,
    FONT_SMALL,
    FONT_SUBTITLE,
    INPUT_BG,
    PADDING_LG,
    PADDING_MD,
    PADDING_SM,
    PREVIEW_SIZE,
    TEXT_ON_ACCENT,
    TEXT_PRIMARY,
    TEXT_SECONDARY,
)

_FILE_TYPES: list[tuple[str, str]] = [
    ("Images", "*.png *.jpg *.jpeg *.gif *.webp *.bmp"),
    ("All files", "*.*"),
]


class ImageAnalyzerPanel(ctk.CTkFrame):
    """File chooser, preview and description for one archive photo.

    Parameters
    ----------
    parent:
        Marketing page section this panel lives in.
    analyzer:
        Fresh ``ImageAnalyzerService`` for this mount.
    logger:
        Structured logger instance.
    """

    def __init__(
        self,
        parent: ctk.CTkFrame,
        analyzer: ImageAnalyzerService,
        logger: StructuredLogger,
    ) -> None:
        super().__init__(
            parent,
            fg_color=CARD_BG,
            corner_radius=16,
            border_width=1,
            border_color=CARD_BORDER,
        )
        self._analyzer = analyzer
        self._logger = logger
        self._mounted: bool = True
        self._post_to_ui = root_dispatcher(parent, logger)
        self._preview_image: Optional[ctk.CTkImage] = None

        self._build_ui()

    # ------------------------------------------------------------------
    # UI Construction
    # ------------------------------------------------------------------

    def _build_ui(self) -> None:
        inner = ctk.CTkFrame(self, fg_color="transparent")
        inner.pack(fill="both", expand=True, padx=PADDING_LG, pady=PADDING_LG)

        ctk.CTkLabel(
            inner,
            text="Bring Your Photos to Life",
            font=FONT_HEADING,
            text_color=TEXT_PRIMARY,
        ).pack(pady=(0, 4))
        ctk.CTkLabel(
            inner,
            text="Upload an old photo and let our AI suggest the stories behind it.",
            font=FONT_SUBTITLE,
            text_color=TEXT_SECONDARY,
        ).pack(pady=(0, PADDING_MD))

        ctk.CTkButton(
            inner,
            text="Upload a Photo",
            font=FONT_BUTTON,
            fg_color=ACCENT_PRIMARY,
            hover_color=ACCENT_HOVER,
            text_color=TEXT_ON_ACCENT,
            height=44,
            corner_radius=CORNER_RADIUS,
            command=self._choose_file,
        ).pack(pady=(0, PADDING_MD))

        body = ctk.CTkFrame(inner, fg_color="transparent")
        body.pack(fill="both", expand=True)
        body.grid_columnconfigure(0, weight=0)
        body.grid_columnconfigure(1, weight=1)

        self._preview_label = ctk.CTkLabel(
            body,
            text="No photo selected",
            font=FONT_SMALL,
            text_color=TEXT_SECONDARY,
            width=PREVIEW_SIZE,
            height=PREVIEW_SIZE,
            fg_color=INPUT_BG,
            corner_radius=CORNER_RADIUS,
        )
        self._preview_label.grid(row=0, column=0, sticky="n", padx=(0, PADDING_MD))

        right = ctk.CTkFrame(body, fg_color="transparent")
        right.grid(row=0, column=1, sticky="nsew")

        self._status_label = ctk.CTkLabel(
            right,
            text="",
            font=FONT_SMALL,
            text_color=TEXT_SECONDARY,
            anchor="w",
        )
        self._status_label.pack(fill="x")

        self._error_label = ctk.CTkLabel(
            right,
            text="",
            font=FONT_SMALL,
            text_color=ERROR_TEXT,
            anchor="w",
            wraplength=480,
        )
        self._error_label.pack(fill="x")

        self._result_box = ctk.CTkTextbox(
            right,
            font=FONT_BODY,
            fg_color=INPUT_BG,
            text_color=TEXT_PRIMARY,
            wrap="word",
            height=PREVIEW_SIZE,
        )
        self._result_box.pack(fill="both", expand=True, pady=(PADDING_SM, 0))
        self._result_box.configure(state="disabled")

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def _choose_file(self) -> None:
        selected = filedialog.askopenfilename(
            title="Choose a photo",
            filetypes=_FILE_TYPES,
        )
        if not selected:
            return
        self._start_analysis(Path(selected))

    def _start_analysis(self, file_path: Path) -> None:
        started = self._analyzer.begin(file_path)
        if isinstance(started, AnalysisOutcome):
            self._show_outcome(started)
            return

        self._set_result("")
        self._error_label.configure(text="")
        self._status_label.configure(text="Analyzing…")
        self._show_preview(file_path)

        threading.Thread(
            target=self._analyze,
            args=(started,),
            name=f"image-analysis-{started.generation}",
            daemon=True,
        ).start()

    def _analyze(self, ticket: AnalysisTicket) -> None:
        """Remote call on a worker thread; result marshalled back."""
        outcome = self._analyzer.analyze(ticket)
        self._post_to_ui(lambda: self._on_outcome(outcome))

    def _on_outcome(self, outcome: AnalysisOutcome) -> None:
        if not self._mounted:
            return
        accepted = self._analyzer.accept(outcome)
        if accepted is not None:
            self._show_outcome(accepted)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _show_outcome(self, outcome: AnalysisOutcome) -> None:
        self._status_label.configure(text="")
        if outcome.success:
            self._error_label.configure(text="")
            self._set_result(outcome.text or "")
        else:
            self._error_label.configure(text=outcome.error or "")
            self._set_result("")

    def _set_result(self, text: str) -> None:
        self._result_box.configure(state="normal")
        self._result_box.delete("1.0", "end")
        self._result_box.insert("1.0", text)
        self._result_box.configure(state="disabled")

    def _show_preview(self, file_path: Path) -> None:
        try:
            with Image.open(file_path) as img:
                img.thumbnail((PREVIEW_SIZE, PREVIEW_SIZE))
                thumbnail = img.copy()
        except (OSError, UnidentifiedImageError) as exc:
            self._logger.warning("Could not render preview for %s: %s", file_path.name, exc)
            self._preview_label.configure(image=None, text="Preview unavailable")
            return
        self._preview_image = ctk.CTkImage(
            light_image=thumbnail, dark_image=thumbnail, size=thumbnail.size,
        )
        self._preview_label.configure(image=self._preview_image, text="")

    # ------------------------------------------------------------------
    # Teardown
    # ------------------------------------------------------------------

    def destroy(self) -> None:
        self._mounted = False
        super().destroy()
