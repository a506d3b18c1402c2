"""Lore desktop client: marketing screens, member profile and LoreBot."""

__version__ = "0.1.0"
