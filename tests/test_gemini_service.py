"""Tests for the Gemini wrapper against a fake ``genai.Client``."""

import base64
import binascii
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from lore.logger import StructuredLogger
from lore.services.gemini_service import (
    CHAT_FALLBACK_REPLY,
    IMAGE_ANALYSIS_PROMPT,
    LOREBOT_PERSONA,
    GeminiService,
)

MODEL = "gemini-2.5-flash"


@pytest.fixture
def client() -> MagicMock:
    return MagicMock(name="genai_client")


@pytest.fixture
def gemini(client: MagicMock, logger: StructuredLogger) -> GeminiService:
    return GeminiService(api_key="unused", model=MODEL, logger=logger, client=client)


def test_create_chat_uses_persona_and_model(gemini: GeminiService, client: MagicMock) -> None:
    chat = gemini.create_chat()

    assert chat is client.chats.create.return_value
    kwargs = client.chats.create.call_args.kwargs
    assert kwargs["model"] == MODEL
    assert kwargs["config"].system_instruction == LOREBOT_PERSONA


def test_continue_chat_returns_reply_text(gemini: GeminiService) -> None:
    chat = MagicMock()
    chat.send_message.return_value = SimpleNamespace(text="Lore keeps your history safe.")

    reply = gemini.continue_chat(chat, "What is Lore?")

    assert reply == "Lore keeps your history safe."
    chat.send_message.assert_called_once_with("What is Lore?")


def test_continue_chat_failure_becomes_apology(gemini: GeminiService) -> None:
    chat = MagicMock()
    chat.send_message.side_effect = RuntimeError("503 UNAVAILABLE")

    assert gemini.continue_chat(chat, "hello") == CHAT_FALLBACK_REPLY


def test_continue_chat_empty_reply_becomes_apology(gemini: GeminiService) -> None:
    chat = MagicMock()
    chat.send_message.return_value = SimpleNamespace(text=None)

    assert gemini.continue_chat(chat, "hello") == CHAT_FALLBACK_REPLY


def test_describe_image_sends_bytes_and_prompt(gemini: GeminiService, client: MagicMock) -> None:
    client.models.generate_content.return_value = SimpleNamespace(text="A wedding, c. 1950.")
    encoded = base64.b64encode(b"jpeg-bytes").decode("ascii")

    text = gemini.describe_image(encoded, "image/jpeg")

    assert text == "A wedding, c. 1950."
    kwargs = client.models.generate_content.call_args.kwargs
    assert kwargs["model"] == MODEL
    image_part, prompt = kwargs["contents"]
    assert image_part.inline_data.data == b"jpeg-bytes"
    assert image_part.inline_data.mime_type == "image/jpeg"
    assert prompt == IMAGE_ANALYSIS_PROMPT


def test_describe_image_errors_propagate(gemini: GeminiService, client: MagicMock) -> None:
    client.models.generate_content.side_effect = RuntimeError("quota exceeded")

    with pytest.raises(RuntimeError, match="quota"):
        gemini.describe_image(base64.b64encode(b"x").decode("ascii"), "image/png")


def test_describe_image_empty_text_raises(gemini: GeminiService, client: MagicMock) -> None:
    client.models.generate_content.return_value = SimpleNamespace(text="")

    with pytest.raises(RuntimeError):
        gemini.describe_image(base64.b64encode(b"x").decode("ascii"), "image/png")


def test_describe_image_rejects_bad_base64(gemini: GeminiService, client: MagicMock) -> None:
    with pytest.raises(binascii.Error):
        gemini.describe_image("not base64!", "image/png")

    client.models.generate_content.assert_not_called()
