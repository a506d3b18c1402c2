"""Tests for the JSON log format and audit entries."""

import io
import json

import pytest

from lore.logger import StructuredLogger, configure_logging, get_logger
from lore.utils.audit import log_audit_event


def _lines(stream: io.StringIO) -> list[dict]:
    return [json.loads(line) for line in stream.getvalue().splitlines() if line]


def test_log_lines_are_json(logger: StructuredLogger, log_stream: io.StringIO) -> None:
    logger.info("Profile loaded for %s", "ada")

    (entry,) = _lines(log_stream)
    assert entry["level"] == "INFO"
    assert entry["message"] == "Profile loaded for ada"
    assert entry["logger_name"] == logger.logger.name
    assert "timestamp" in entry
    assert "extra" not in entry


def test_extra_fields_are_nested(logger: StructuredLogger, log_stream: io.StringIO) -> None:
    logger.info("Chat session created.", extra={"model": "gemini-2.5-flash"})

    (entry,) = _lines(log_stream)
    assert entry["extra"] == {"model": "gemini-2.5-flash"}


def test_exception_traceback_included(logger: StructuredLogger, log_stream: io.StringIO) -> None:
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        logger.error("Upload failed", exc_info=True)

    (entry,) = _lines(log_stream)
    assert "RuntimeError: boom" in entry["exception"]


@pytest.fixture
def reset_root_logger():
    yield
    configure_logging(stream=io.StringIO(), log_file="")


def test_child_loggers_are_namespaced() -> None:
    assert get_logger("chat").logger.name == "lore.chat"
    assert get_logger("lore.profile").logger.name == "lore.profile"


@pytest.mark.usefixtures("reset_root_logger")
def test_empty_log_file_means_console_only() -> None:
    root = configure_logging(stream=io.StringIO(), log_file="")

    assert root.name == "lore"
    assert len(root.handlers) == 1


@pytest.mark.usefixtures("reset_root_logger")
def test_file_handler_is_installed_once(tmp_path) -> None:
    log_file = tmp_path / "logs" / "lore.log"
    configure_logging(stream=io.StringIO(), log_file=str(log_file))
    root = configure_logging(stream=io.StringIO(), log_file=str(log_file))

    assert len(root.handlers) == 2
    get_logger("profile").info("Profile saved")
    for handler in root.handlers:
        handler.flush()
    assert "Profile saved" in log_file.read_text(encoding="utf-8")


def test_audit_event_is_logged_and_returned(
    logger: StructuredLogger, log_stream: io.StringIO,
) -> None:
    event = log_audit_event(
        logger,
        action="PROFILE_UPSERT",
        entity_type="Profile",
        entity_id="user-1",
        user_id="user-1",
        details={"fields": 4},
    )

    (entry,) = _lines(log_stream)
    assert entry["message"].startswith("AUDIT: ")
    payload = json.loads(entry["message"][len("AUDIT: "):])
    assert payload["action"] == "PROFILE_UPSERT"
    assert payload["entity_id"] == "user-1"
    assert payload["details"] == {"fields": 4}
    assert payload["timestamp"] == event.timestamp
