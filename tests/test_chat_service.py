"""Tests for the LoreBot conversation state."""

from unittest.mock import MagicMock

import pytest

from lore.logger import StructuredLogger
from lore.models.chat import ChatMessage
from lore.models.enums import Sender
from lore.services.chat_service import CHAT_GREETING, Active, ChatConversation, NotStarted
from lore.services.gemini_service import CHAT_FALLBACK_REPLY, GeminiService


@pytest.fixture
def gemini() -> MagicMock:
    gemini = MagicMock(spec=GeminiService)
    gemini.continue_chat.return_value = "Lore has family trees."
    return gemini


@pytest.fixture
def convo(gemini: MagicMock, logger: StructuredLogger) -> ChatConversation:
    return ChatConversation(gemini=gemini, logger=logger)


def test_fresh_mount_has_only_greeting(convo: ChatConversation, gemini: MagicMock) -> None:
    assert convo.messages == (ChatMessage(sender=Sender.BOT, text=CHAT_GREETING),)
    assert not convo.is_open
    assert not convo.loading
    assert isinstance(convo.session_state, NotStarted)
    gemini.create_chat.assert_not_called()


def test_open_state_independent_of_messages(convo: ChatConversation) -> None:
    assert convo.toggle() is True
    convo.begin_turn("hi")
    assert convo.toggle() is False
    convo.close()
    assert not convo.is_open
    assert len(convo.messages) == 2


def test_full_turn(convo: ChatConversation, gemini: MagicMock) -> None:
    text = convo.begin_turn("What is Lore?")
    assert text == "What is Lore?"
    assert convo.loading
    assert convo.messages[-1] == ChatMessage(sender=Sender.USER, text="What is Lore?")

    reply = convo.fetch_reply(text)
    convo.finish_turn(reply)

    assert not convo.loading
    assert convo.messages[-1] == ChatMessage(sender=Sender.BOT, text="Lore has family trees.")
    gemini.continue_chat.assert_called_once_with(gemini.create_chat.return_value, "What is Lore?")


def test_second_send_while_outstanding_is_ignored(convo: ChatConversation) -> None:
    first = convo.begin_turn("first")
    second = convo.begin_turn("second")

    assert first == "first"
    assert second is None
    user_entries = [m for m in convo.messages if m.sender == Sender.USER]
    assert [m.text for m in user_entries] == ["first"]

    convo.finish_turn("answer")
    assert convo.begin_turn("third") == "third"


@pytest.mark.parametrize("text", ["", "   ", "\n\t"])
def test_blank_text_is_a_no_op(convo: ChatConversation, text: str) -> None:
    assert convo.begin_turn(text) is None
    assert len(convo.messages) == 1
    assert not convo.loading
    assert not convo.can_send(text)


def test_session_created_once_and_reused(convo: ChatConversation, gemini: MagicMock) -> None:
    for question in ("one", "two", "three"):
        convo.begin_turn(question)
        convo.finish_turn(convo.fetch_reply(question))

    gemini.create_chat.assert_called_once_with()
    assert isinstance(convo.session_state, Active)
    assert convo.session_state.handle is gemini.create_chat.return_value


def test_session_creation_failure_yields_apology(
    convo: ChatConversation, gemini: MagicMock,
) -> None:
    gemini.create_chat.side_effect = RuntimeError("bad key")

    assert convo.fetch_reply("hi") == CHAT_FALLBACK_REPLY
    assert isinstance(convo.session_state, NotStarted)


def test_listeners_see_every_transcript_change(convo: ChatConversation) -> None:
    snapshots: list[int] = []
    convo.add_listener(lambda messages: snapshots.append(len(messages)))

    convo.begin_turn("hi")
    convo.finish_turn("hello")

    assert snapshots == [2, 3]


def test_can_send_false_while_loading(convo: ChatConversation) -> None:
    assert convo.can_send("hello")
    convo.begin_turn("hello")
    assert not convo.can_send("again")
