"""
Structured JSON Logging Module.

All application loggers live under the ``lore`` hierarchy.  Handlers
(console and rotating file) are installed once, on the ``lore`` root,
by ``configure_logging``; every ``StructuredLogger`` is a child that
propagates to them, so a single file handler owns ``lore.log``.

Usage::

    configure_logging(level=config.log_level, log_file=config.LOG_FILE)
    log = get_logger("chat")            # -> logger "lore.chat"
    log.info("Chat session created", extra={"model": "gemini-2.5-flash"})
"""

import json
import logging
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, TextIO, Union

ROOT_LOGGER_NAME: str = "lore"
DEFAULT_LOG_FILE: str = "lore.log"
DEFAULT_MAX_BYTES: int = 5_242_880  # 5 MB
DEFAULT_BACKUP_COUNT: int = 3


class JSONFormatter(logging.Formatter):
    """One JSON object per record.

    Keys: ``timestamp`` (ISO-8601 UTC), ``level``, ``logger_name``,
    ``message``, and when present ``extra`` (fields passed through the
    ``extra`` kwarg) and ``exception`` (formatted traceback).
    """

    _STANDARD_ATTRS: frozenset[str] = frozenset(
        logging.LogRecord(
            name="", level=0, pathname="", lineno=0, msg="", args=(), exc_info=None
        ).__dict__.keys()
    ) | {"message", "asctime"}

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Union[str, dict[str, str]]] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger_name": record.name,
            "message": record.getMessage(),
        }

        extra_fields = {
            key: str(value)
            for key, value in record.__dict__.items()
            if key not in self._STANDARD_ATTRS
        }
        if extra_fields:
            entry["extra"] = extra_fields

        if record.exc_info and not record.exc_text:
            record.exc_text = self.formatException(record.exc_info)
        if record.exc_text:
            entry["exception"] = record.exc_text

        return json.dumps(entry, ensure_ascii=False)


# ---------------------------------------------------------------------------
# Handler setup
# ---------------------------------------------------------------------------

def configure_logging(
    level: int = logging.INFO,
    stream: Optional[TextIO] = None,
    log_file: str = DEFAULT_LOG_FILE,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
) -> logging.Logger:
    """Install the console and file handlers on the ``lore`` root logger.

    Replaces any handlers installed by an earlier call.  An empty
    *log_file* means console only.  A log file that cannot be opened is
    reported and skipped rather than aborting start-up.
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(level)
    root.propagate = False

    formatter = JSONFormatter()
    console = logging.StreamHandler(stream or sys.stdout)
    console.setFormatter(formatter)
    root.addHandler(console)

    if log_file:
        try:
            log_path = Path(log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                filename=str(log_path),
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            )
        except OSError as exc:
            root.warning(
                "Could not create log file '%s': %s. "
                "Continuing with console logging only.",
                log_file,
                exc,
            )
        else:
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)
    return root


def _qualified(name: str) -> str:
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return name
    return f"{ROOT_LOGGER_NAME}.{name}"


# ---------------------------------------------------------------------------
# Injectable logger
# ---------------------------------------------------------------------------

class StructuredLogger:
    """Injectable wrapper around a logger in the ``lore`` hierarchy.

    Parameters
    ----------
    name:
        Logger name; prefixed with ``lore.`` unless it already is.
    level:
        Optional level for this logger only.
    stream:
        When given, records go to a private JSON handler on *stream*
        instead of the shared root handlers.  Used by tests.
    """

    def __init__(
        self,
        name: str = ROOT_LOGGER_NAME,
        level: Optional[int] = None,
        stream: Optional[TextIO] = None,
    ) -> None:
        self._logger: logging.Logger = logging.getLogger(_qualified(name))
        if level is not None:
            self._logger.setLevel(level)

        if stream is not None:
            for handler in list(self._logger.handlers):
                self._logger.removeHandler(handler)
            handler = logging.StreamHandler(stream)
            handler.setFormatter(JSONFormatter())
            self._logger.addHandler(handler)
            self._logger.propagate = False
            if level is None:
                self._logger.setLevel(logging.INFO)

    @property
    def logger(self) -> logging.Logger:
        """Access the underlying ``logging.Logger`` directly."""
        return self._logger

    # -- Convenience delegates ------------------------------------------------

    def debug(self, msg: str, *args: object, **kwargs: object) -> None:
        self._logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args: object, **kwargs: object) -> None:
        self._logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args: object, **kwargs: object) -> None:
        self._logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args: object, **kwargs: object) -> None:
        self._logger.error(msg, *args, **kwargs)

    def critical(self, msg: str, *args: object, **kwargs: object) -> None:
        self._logger.critical(msg, *args, **kwargs)


def get_logger(name: str = ROOT_LOGGER_NAME) -> StructuredLogger:
    """Return a ``StructuredLogger`` for ``lore.<name>``."""
    return StructuredLogger(name=name)
