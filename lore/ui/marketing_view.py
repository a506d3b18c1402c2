"""Marketing View — Public Landing Page.

Static sections (header, hero, features, testimonials, CTA, footer)
plus the two interactive pieces available to anonymous visitors: the
photo analyzer and the floating LoreBot chat widget.

Every "Sign In" / "Get Started" button only raises the show-auth latch
through the injected callback; the shell decides what to render.
"""

from __future__ import annotations

from datetime import date
from typing import Callable, Final

import customtkinter as ctk

from lore.logger import StructuredLogger
from lore.services.chat_service import ChatConversation
from lore.services.image_analysis import ImageAnalyzerService
from lore.ui.components.chat_widget import ChatWidget
from lore.ui.components.image_analyzer_panel import ImageAnalyzerPanel
from lore.ui.theme import (
    ACCENT_HOVER,
    ACCENT_PRIMARY,
    ACCENT_SOFT,
    CARD_BG,
    CARD_BORDER,
    CORNER_RADIUS,
    FONT_BODY,
    FONT_BRAND,
    FONT_BUTTON,
    FONT_CAPTION,
    FONT_CARD_TITLE,
    FONT_HEADING,
    FONT_HERO,
    FONT_SMALL,
    FONT_SUBTITLE,
    HEADER_BG,
    HEADER_HEIGHT,
    PADDING_LG,
    PADDING_MD,
    PADDING_SM,
    PAGE_BG,
    SECTION_BG,
    TEXT_MUTED,
    TEXT_ON_ACCENT,
    TEXT_PRIMARY,
    TEXT_SECONDARY,
)

# ---------------------------------------------------------------------------
# Page copy
# ---------------------------------------------------------------------------

FEATURES: Final[tuple[tuple[str, str, str], ...]] = (
    ("\U0001F333", "Visual Family Trees",
     "Map the relationships of any family or community, however it is shaped."),
    ("\U0001F916", "AI Assistant",
     "Ask questions, describe old photos and discover the stories worth recording."),
    ("\U0001F4C5", "Timeline, Tree & Storage",
     "One place for dates, people and documents, all linked together."),
    ("\U0001F4AC", "Social Feed",
     "Share memories with relatives and see what others are preserving."),
    ("\U0001F512", "Secure Archiving",
     "Your history is stored safely and shared only with the people you choose."),
)

TESTIMONIALS: Final[tuple[tuple[str, str], ...]] = (
    ("Lore helped our family piece together four generations of stories "
     "we thought were lost.", "Amara O., family historian"),
    ("Our neighbourhood association finally has one archive everyone can "
     "contribute to.", "Daniel R., community organiser"),
    ("The photo assistant asked questions I never thought to ask my "
     "grandmother.", "Mei L., Lore member"),
)

_FEATURE_COLUMNS: int = 3


class MarketingView(ctk.CTkFrame):
    """Anonymous landing page.

    Parameters
    ----------
    parent:
        The root ``CTk`` window this frame belongs to.
    on_show_auth:
        Raises the show-auth latch.
    conversation:
        Fresh ``ChatConversation`` for the chat widget.
    analyzer:
        Fresh ``ImageAnalyzerService`` for the photo panel.
    logger:
        Structured logger instance.
    """

    def __init__(
        self,
        parent: ctk.CTk,
        on_show_auth: Callable[[], None],
        conversation: ChatConversation,
        analyzer: ImageAnalyzerService,
        logger: StructuredLogger,
    ) -> None:
        super().__init__(parent, fg_color=PAGE_BG)

        self._on_show_auth = on_show_auth
        self._logger = logger

        self._build_header()

        self._body = ctk.CTkScrollableFrame(self, fg_color=PAGE_BG)
        self._body.pack(fill="both", expand=True)

        self._build_hero()
        self._build_features()
        self._build_testimonials()

        self._analyzer_panel = ImageAnalyzerPanel(
            parent=self._body, analyzer=analyzer, logger=logger,
        )
        self._analyzer_panel.pack(fill="x", padx=PADDING_LG * 2, pady=PADDING_LG)

        self._build_cta()
        self._build_footer()

        # Floating over the page, bottom-right.
        self._chat_widget = ChatWidget(
            parent=self, conversation=conversation, logger=logger,
        )
        self._chat_widget.place(relx=1.0, rely=1.0, x=-PADDING_LG, y=-PADDING_LG, anchor="se")

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def _build_header(self) -> None:
        header = ctk.CTkFrame(self, fg_color=HEADER_BG, corner_radius=0, height=HEADER_HEIGHT)
        header.pack(fill="x")
        header.pack_propagate(False)

        ctk.CTkLabel(
            header, text="Lore", font=FONT_BRAND, text_color=ACCENT_PRIMARY,
        ).pack(side="left", padx=PADDING_LG)
        ctk.CTkLabel(
            header,
            text="Family & community archiving",
            font=FONT_SMALL,
            text_color=TEXT_SECONDARY,
        ).pack(side="left")

        self._accent_button(header, "Sign In").pack(side="right", padx=PADDING_LG)

    def _build_hero(self) -> None:
        hero = ctk.CTkFrame(self._body, fg_color="transparent")
        hero.pack(fill="x", pady=(PADDING_LG * 3, PADDING_LG * 2))

        ctk.CTkLabel(
            hero,
            text="Every Family Has a Story.\nPreserve Yours.",
            font=FONT_HERO,
            text_color=TEXT_PRIMARY,
            justify="center",
        ).pack(pady=(0, PADDING_MD))
        ctk.CTkLabel(
            hero,
            text=(
                "Lore brings family trees, timelines and archives together so your "
                "community's history is never forgotten."
            ),
            font=FONT_SUBTITLE,
            text_color=TEXT_SECONDARY,
            wraplength=640,
        ).pack(pady=(0, PADDING_LG))
        self._accent_button(hero, "Get Started", height=48).pack()

    def _build_features(self) -> None:
        section = self._section("Everything Your History Needs")
        grid = ctk.CTkFrame(section, fg_color="transparent")
        grid.pack(fill="x")
        for column in range(_FEATURE_COLUMNS):
            grid.grid_columnconfigure(column, weight=1, uniform="feature")

        for index, (icon, title, description) in enumerate(FEATURES):
            card = self._card(grid)
            card.grid(
                row=index // _FEATURE_COLUMNS,
                column=index % _FEATURE_COLUMNS,
                sticky="nsew",
                padx=PADDING_SM,
                pady=PADDING_SM,
            )
            ctk.CTkLabel(card, text=icon, font=FONT_HEADING).pack(
                anchor="w", padx=PADDING_MD, pady=(PADDING_MD, 4),
            )
            ctk.CTkLabel(
                card, text=title, font=FONT_CARD_TITLE, text_color=TEXT_PRIMARY, anchor="w",
            ).pack(fill="x", padx=PADDING_MD)
            ctk.CTkLabel(
                card,
                text=description,
                font=FONT_BODY,
                text_color=TEXT_SECONDARY,
                anchor="w",
                justify="left",
                wraplength=280,
            ).pack(fill="x", padx=PADDING_MD, pady=(4, PADDING_MD))

    def _build_testimonials(self) -> None:
        section = self._section("Loved by Families and Communities")
        row = ctk.CTkFrame(section, fg_color="transparent")
        row.pack(fill="x")
        for column, (quote, author) in enumerate(TESTIMONIALS):
            row.grid_columnconfigure(column, weight=1, uniform="testimonial")
            card = self._card(row)
            card.grid(row=0, column=column, sticky="nsew", padx=PADDING_SM)
            ctk.CTkLabel(
                card,
                text=f"“{quote}”",
                font=FONT_BODY,
                text_color=TEXT_PRIMARY,
                justify="left",
                wraplength=280,
            ).pack(fill="x", padx=PADDING_MD, pady=(PADDING_MD, PADDING_SM))
            ctk.CTkLabel(
                card, text=f"— {author}", font=FONT_SMALL, text_color=ACCENT_PRIMARY,
            ).pack(anchor="e", padx=PADDING_MD, pady=(0, PADDING_MD))

    def _build_cta(self) -> None:
        cta = ctk.CTkFrame(self._body, fg_color=ACCENT_SOFT, corner_radius=16)
        cta.pack(fill="x", padx=PADDING_LG * 2, pady=PADDING_LG)
        ctk.CTkLabel(
            cta,
            text="Start Preserving Your Story Today",
            font=FONT_HEADING,
            text_color=TEXT_PRIMARY,
        ).pack(pady=(PADDING_LG, PADDING_SM))
        ctk.CTkLabel(
            cta,
            text="Create a free account and invite your family in minutes.",
            font=FONT_SUBTITLE,
            text_color=TEXT_SECONDARY,
        ).pack(pady=(0, PADDING_MD))
        self._accent_button(cta, "Get Started", height=48).pack(pady=(0, PADDING_LG))

    def _build_footer(self) -> None:
        footer = ctk.CTkFrame(self._body, fg_color=SECTION_BG, corner_radius=0)
        footer.pack(fill="x", pady=(PADDING_LG, 0))
        ctk.CTkLabel(
            footer,
            text=f"© {date.today().year} Lore",
            font=FONT_CAPTION,
            text_color=TEXT_MUTED,
        ).pack(side="left", padx=PADDING_LG, pady=PADDING_MD)
        ctk.CTkLabel(
            footer, text="Privacy    Terms", font=FONT_CAPTION, text_color=TEXT_MUTED,
        ).pack(side="right", padx=PADDING_LG, pady=PADDING_MD)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _section(self, title: str) -> ctk.CTkFrame:
        section = ctk.CTkFrame(self._body, fg_color="transparent")
        section.pack(fill="x", padx=PADDING_LG * 2, pady=PADDING_LG)
        ctk.CTkLabel(
            section, text=title, font=FONT_HEADING, text_color=TEXT_PRIMARY,
        ).pack(pady=(0, PADDING_MD))
        return section

    @staticmethod
    def _card(parent: ctk.CTkFrame) -> ctk.CTkFrame:
        return ctk.CTkFrame(
            parent,
            fg_color=CARD_BG,
            corner_radius=CORNER_RADIUS * 2,
            border_width=1,
            border_color=CARD_BORDER,
        )

    def _accent_button(
        self,
        parent: ctk.CTkFrame,
        text: str,
        height: int = 36,
    ) -> ctk.CTkButton:
        return ctk.CTkButton(
            parent,
            text=text,
            font=FONT_BUTTON,
            fg_color=ACCENT_PRIMARY,
            hover_color=ACCENT_HOVER,
            text_color=TEXT_ON_ACCENT,
            height=height,
            corner_radius=CORNER_RADIUS,
            command=self._handle_show_auth,
        )

    def _handle_show_auth(self) -> None:
        self._logger.info("Visitor requested sign-in.")
        self._on_show_auth()
