"""
Profile Models.

One ``profiles`` row per user, plus the result objects returned by the
profile editor for the save and avatar-upload actions.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator


class Profile(BaseModel):
    """A ``profiles`` row.  ``id`` always equals the session user id."""

    id: str
    full_name: str = ""
    display_name: str = ""
    bio: str = ""
    avatar_url: str = ""
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

    @field_validator("full_name", "display_name", "bio", "avatar_url", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Optional[str]) -> str:
        return value or ""

    def to_upsert_payload(self) -> dict[str, Optional[str]]:
        """Row payload for ``upsert``; ``updated_at`` as ISO-8601."""
        payload = self.model_dump(mode="json")
        if payload.get("updated_at") is None:
            payload.pop("updated_at", None)
        return payload


class ProfileSaveResult(BaseModel):
    success: bool
    message: str


class AvatarUploadResult(BaseModel):
    """Outcome of one avatar upload.

    ``avatar_url`` is the public URL of the new blob on success.
    ``persisted`` tells whether the URL was also written to the profile
    row; a failed write leaves the URL for the next explicit save.
    """

    success: bool
    message: str = ""
    avatar_url: Optional[str] = None
    path: Optional[str] = None
    persisted: bool = False
