"""
Background Task Helpers.

Remote calls run on daemon threads; their results are handed back to
the Tk main loop through a *dispatcher* (a callable that schedules a
zero-argument function on the UI thread).

``run_in_background`` always delivers exactly one ``TaskOutcome``,
even when the work raises, so loading flags are never left set.
``guarded_dispatcher`` wraps a scheduler such as ``root.after`` so a
delivery that arrives after the window is gone is logged and dropped.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

from lore.logger import StructuredLogger

T = TypeVar("T")

Dispatcher = Callable[[Callable[[], None]], None]


@dataclass(frozen=True)
class TaskOutcome(Generic[T]):
    """Return value of the work, or the exception it raised."""

    value: Optional[T] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def guarded_dispatcher(
    schedule: Callable[[Callable[[], None]], object],
    logger: StructuredLogger,
    ignored: tuple[type[BaseException], ...] = (RuntimeError,),
) -> Dispatcher:
    """Wrap *schedule* so the *ignored* errors are logged, not raised.

    Tk raises ``TclError`` when the target widget was destroyed and
    ``RuntimeError`` once the main loop has exited.
    """
    def _dispatch(callback: Callable[[], None]) -> None:
        try:
            schedule(callback)
        except ignored as exc:
            logger.debug("UI dispatch dropped (window gone): %s", exc)

    return _dispatch


def run_in_background(
    name: str,
    work: Callable[[], T],
    on_done: Callable[[TaskOutcome[T]], None],
    dispatch: Dispatcher,
    logger: StructuredLogger,
) -> threading.Thread:
    """Run *work* on a daemon thread and dispatch *on_done* with its outcome.

    Parameters
    ----------
    name:
        Thread name, also used in the failure log line.
    work:
        The blocking call.
    on_done:
        Receives the ``TaskOutcome``; runs wherever *dispatch* puts it.
    dispatch:
        Usually a ``guarded_dispatcher`` around the root window's ``after``.
    logger:
        Structured logger instance.
    """
    def _worker() -> None:
        outcome: TaskOutcome[T]
        try:
            outcome = TaskOutcome(value=work())
        except Exception as exc:
            logger.error("Background task %s failed: %s", name, exc, exc_info=True)
            outcome = TaskOutcome(error=exc)
        dispatch(lambda: on_done(outcome))

    thread = threading.Thread(target=_worker, name=name, daemon=True)
    thread.start()
    return thread
