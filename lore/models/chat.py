"""Chat transcript entry."""

from __future__ import annotations

from pydantic import BaseModel

from lore.models.enums import Sender


class ChatMessage(BaseModel):
    sender: Sender
    text: str

    model_config = {"frozen": True}
