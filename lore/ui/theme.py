"""UI Theme Constants for Lore.

Centralises all colour, font, and sizing constants for the
CustomTkinter interface.  Dark slate marketing surfaces with emerald
accents; the member area uses light cards on the same slate base.

This file contains **zero logic** — only ``Final`` constants.
"""

from __future__ import annotations

from typing import Final

# ---------------------------------------------------------------------------
# Colour palette — slate + emerald
# ---------------------------------------------------------------------------

PAGE_BG: Final[str] = "#0f172a"          # slate-900
SECTION_BG: Final[str] = "#1e293b"       # slate-800
CARD_BG: Final[str] = "#1e293b"
CARD_BORDER: Final[str] = "#334155"      # slate-700
HEADER_BG: Final[str] = "#0b1222"

ACCENT_PRIMARY: Final[str] = "#10b981"   # emerald-500
ACCENT_HOVER: Final[str] = "#059669"     # emerald-600
ACCENT_SOFT: Final[str] = "#064e3b"      # emerald-900

TEXT_PRIMARY: Final[str] = "#f1f5f9"     # slate-100
TEXT_SECONDARY: Final[str] = "#94a3b8"   # slate-400
TEXT_MUTED: Final[str] = "#64748b"       # slate-500
TEXT_ON_ACCENT: Final[str] = "#ffffff"

# Input / form
INPUT_BG: Final[str] = "#0f172a"
INPUT_BORDER: Final[str] = "#475569"
INPUT_DISABLED_BG: Final[str] = "#1e293b"
ERROR_TEXT: Final[str] = "#f87171"       # red-400
SUCCESS_TEXT: Final[str] = "#34d399"     # emerald-400

# Chat bubbles
BUBBLE_USER_BG: Final[str] = "#10b981"
BUBBLE_BOT_BG: Final[str] = "#334155"

# Danger action
SIGN_OUT_PRIMARY: Final[str] = "#475569"
SIGN_OUT_HOVER: Final[str] = "#334155"

# ---------------------------------------------------------------------------
# Fonts (Segoe UI — Windows default, fallback to system)
# ---------------------------------------------------------------------------

FONT_FAMILY: Final[str] = "Segoe UI"
FONT_BRAND: Final[tuple[str, int, str]] = (FONT_FAMILY, 22, "bold")
FONT_HERO: Final[tuple[str, int, str]] = (FONT_FAMILY, 34, "bold")
FONT_HEADING: Final[tuple[str, int, str]] = (FONT_FAMILY, 24, "bold")
FONT_CARD_TITLE: Final[tuple[str, int, str]] = (FONT_FAMILY, 15, "bold")
FONT_SUBTITLE: Final[tuple[str, int]] = (FONT_FAMILY, 15)
FONT_BODY: Final[tuple[str, int]] = (FONT_FAMILY, 13)
FONT_LABEL: Final[tuple[str, int, str]] = (FONT_FAMILY, 11, "bold")
FONT_SMALL: Final[tuple[str, int]] = (FONT_FAMILY, 11)
FONT_CAPTION: Final[tuple[str, int]] = (FONT_FAMILY, 10)
FONT_BUTTON: Final[tuple[str, int, str]] = (FONT_FAMILY, 13, "bold")
FONT_ICON_LG: Final[tuple[str, int, str]] = (FONT_FAMILY, 24, "bold")

# ---------------------------------------------------------------------------
# Dimensions
# ---------------------------------------------------------------------------

MAIN_WINDOW_WIDTH: Final[int] = 1200
MAIN_WINDOW_HEIGHT: Final[int] = 800
MIN_WINDOW_WIDTH: Final[int] = 720
MIN_WINDOW_HEIGHT: Final[int] = 560
HEADER_HEIGHT: Final[int] = 64
CARD_WIDTH: Final[int] = 440
CHAT_PANEL_WIDTH: Final[int] = 360
CHAT_PANEL_HEIGHT: Final[int] = 460
AVATAR_SIZE: Final[int] = 120
PREVIEW_SIZE: Final[int] = 220
CORNER_RADIUS: Final[int] = 8
PADDING_SM: Final[int] = 8
PADDING_MD: Final[int] = 16
PADDING_LG: Final[int] = 24
