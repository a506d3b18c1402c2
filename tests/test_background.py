"""Tests for worker-thread tasks and UI-thread dispatch."""

import io
import json
import threading
from typing import Callable
from unittest.mock import MagicMock

import pytest

from lore.logger import StructuredLogger
from lore.utils.background import TaskOutcome, guarded_dispatcher, run_in_background


def _collecting_dispatch() -> tuple[list[Callable[[], None]], Callable[[Callable[[], None]], None]]:
    queued: list[Callable[[], None]] = []
    return queued, queued.append


def test_outcome_carries_value(logger: StructuredLogger) -> None:
    queued, dispatch = _collecting_dispatch()
    received: list[TaskOutcome[int]] = []

    run_in_background("answer", lambda: 42, received.append, dispatch, logger).join()
    for callback in queued:
        callback()

    (outcome,) = received
    assert outcome.ok
    assert outcome.value == 42


def test_raising_work_still_delivers_an_outcome(
    logger: StructuredLogger, log_stream: io.StringIO,
) -> None:
    queued, dispatch = _collecting_dispatch()
    received: list[TaskOutcome[None]] = []

    def _boom() -> None:
        raise ValueError("storage offline")

    run_in_background("profile-save", _boom, received.append, dispatch, logger).join()
    for callback in queued:
        callback()

    (outcome,) = received
    assert not outcome.ok
    assert isinstance(outcome.error, ValueError)
    entry = json.loads(log_stream.getvalue().splitlines()[0])
    assert entry["level"] == "ERROR"
    assert "profile-save" in entry["message"]


def test_loading_guard_released_when_work_raises(logger: StructuredLogger) -> None:
    guard = {"loading": True}
    done = threading.Event()

    def _finish(outcome: TaskOutcome[None]) -> None:
        guard["loading"] = False
        done.set()

    def _boom() -> None:
        raise RuntimeError("unexpected")

    run_in_background("avatar-upload", _boom, _finish, lambda cb: cb(), logger)

    assert done.wait(timeout=5)
    assert guard["loading"] is False


def test_dispatch_after_window_closed_is_dropped(
    logger: StructuredLogger, log_stream: io.StringIO,
) -> None:
    schedule = MagicMock(side_effect=RuntimeError("main thread is not in main loop"))
    dispatch = guarded_dispatcher(schedule, logger)
    logger.logger.setLevel("DEBUG")

    dispatch(lambda: None)

    schedule.assert_called_once()
    assert "dispatch dropped" in log_stream.getvalue()


def test_dispatch_ignores_only_listed_errors(logger: StructuredLogger) -> None:
    class WidgetGone(Exception):
        pass

    dispatch = guarded_dispatcher(
        MagicMock(side_effect=WidgetGone("invalid command name")),
        logger,
        ignored=(WidgetGone,),
    )
    dispatch(lambda: None)

    failing = guarded_dispatcher(MagicMock(side_effect=KeyError("x")), logger)
    with pytest.raises(KeyError):
        failing(lambda: None)


def test_dispatch_passes_callback_to_scheduler(logger: StructuredLogger) -> None:
    schedule = MagicMock()
    callback = MagicMock()

    guarded_dispatcher(schedule, logger)(callback)

    schedule.assert_called_once_with(callback)
