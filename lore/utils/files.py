"""File helpers shared by the avatar upload and the image analyzer."""

from __future__ import annotations

import base64
import mimetypes
import secrets
from pathlib import Path
from typing import Optional

__all__ = [
    "avatar_object_name",
    "file_extension",
    "guess_mime_type",
    "strip_data_url_prefix",
    "to_data_url",
]

_DEFAULT_MIME: str = "application/octet-stream"


def file_extension(filename: str) -> str:
    """Text after the last ``.`` of *filename*, or the whole name if it has none."""
    return filename.rsplit(".", 1)[-1]


def avatar_object_name(user_id: str, filename: str, token: Optional[str] = None) -> str:
    """Storage path for a new avatar: ``{user_id}-{random}.{ext}``.

    Uniqueness is probabilistic only; nothing checks for collisions.
    """
    suffix = token if token is not None else secrets.token_hex(8)
    return f"{user_id}-{suffix}.{file_extension(filename)}"


def guess_mime_type(path: Path) -> str:
    mime, _ = mimetypes.guess_type(path.name)
    return mime or _DEFAULT_MIME


def to_data_url(content: bytes, mime_type: str) -> str:
    """Encode *content* as a ``data:`` URL."""
    encoded = base64.b64encode(content).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def strip_data_url_prefix(data_url: str) -> str:
    """Return the base64 payload of a ``data:`` URL."""
    _, _, payload = data_url.partition(",")
    return payload
