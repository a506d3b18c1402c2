"""
Gemini Service.

Thin wrapper over ``google.genai`` for the two generative features:
the LoreBot conversation (stateful chat sessions with a fixed persona)
and one-shot description of archive photos.

Chat failures are absorbed here into a fixed apology so the transcript
always receives a reply; image failures propagate so the analyzer can
show its own message.
"""

from __future__ import annotations

import base64
from typing import Optional

from google import genai
from google.genai import types
from google.genai.chats import Chat

from lore.logger import StructuredLogger
from lore.services.base_service import BaseService

LOREBOT_PERSONA: str = (
    "You are LoreBot, a friendly and helpful assistant for Lore, a platform for "
    "preserving family and community history. Your goal is to answer questions "
    "about the Lore product based on its features: visual family trees for any "
    "community, an AI assistant, combined timeline/tree/storage, a social feed, "
    "and secure archiving. Be encouraging and keep your answers concise and "
    "clear. Do not go off-topic."
)

CHAT_FALLBACK_REPLY: str = (
    "I'm having a little trouble connecting right now. Please try again in a moment."
)

IMAGE_ANALYSIS_PROMPT: str = (
    "Analyze this photo from a family or community archive. Describe what you "
    "see, including people, setting, and potential time period. Suggest what "
    "stories or questions this photo might inspire someone to ask their "
    "relatives. Be descriptive and evocative."
)


class GeminiService(BaseService):
    """Chat sessions and image descriptions from the Gemini API.

    Parameters
    ----------
    api_key:
        Gemini API key.
    model:
        Model name used for both chat and image requests.
    logger:
        Structured logger instance.
    client:
        Pre-built ``genai.Client``, used by tests to inject a fake.
    """

    def __init__(
        self,
        api_key: str,
        model: str,
        logger: StructuredLogger,
        client: Optional[genai.Client] = None,
    ) -> None:
        super().__init__(logger)
        self._model = model
        self._client = client if client is not None else genai.Client(api_key=api_key)

    @property
    def model(self) -> str:
        return self._model

    def create_chat(self, system_instruction: str = LOREBOT_PERSONA) -> Chat:
        """Open a conversation whose persona is fixed for its lifetime."""
        chat = self._client.chats.create(
            model=self._model,
            config=types.GenerateContentConfig(system_instruction=system_instruction),
        )
        self._logger.info("Chat session created.", extra={"model": self._model})
        return chat

    def continue_chat(self, chat: Chat, message: str) -> str:
        """Send one user turn and return the reply text.

        Never raises: any failure, or an empty reply, yields
        ``CHAT_FALLBACK_REPLY``.
        """
        try:
            response = chat.send_message(message)
            text = response.text
        except Exception as exc:
            self._logger.warning("Error in chat: %s", exc, exc_info=True)
            return CHAT_FALLBACK_REPLY
        if not text:
            self._logger.warning("Chat returned an empty reply.")
            return CHAT_FALLBACK_REPLY
        return text

    def describe_image(self, base64_data: str, mime_type: str) -> str:
        """Ask for an evocative description of one archive photo.

        Raises:
            binascii.Error: If *base64_data* is not valid base64.
            RuntimeError: If the model returns no text.
            google.genai.errors.APIError: On remote failures.
        """
        image_part = types.Part.from_bytes(
            data=base64.b64decode(base64_data, validate=True),
            mime_type=mime_type,
        )
        response = self._client.models.generate_content(
            model=self._model,
            contents=[image_part, IMAGE_ANALYSIS_PROMPT],
        )
        text = response.text
        if not text:
            raise RuntimeError("Empty response from Gemini.")
        return text
