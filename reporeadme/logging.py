"""Logging for reporeadme: the ``reporeadme`` logger tree and generation progress lines."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, TextIO

from .models import GenerationStatus

_LOGGER_NAME = "reporeadme"
_CONSOLE_FORMAT = "[reporeadme] %(levelname)s %(step_prefix)s%(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(step_prefix)s%(message)s"


class StepFormatter(logging.Formatter):
    """Formatter that prefixes records carrying a ``step`` with ``[N] ``."""

    def format(self, record: logging.LogRecord) -> str:
        step = getattr(record, "step", None)
        record.step_prefix = f"[{step}] " if step is not None else ""
        return super().format(record)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger under the ``reporeadme`` hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *,
    verbose: bool = False,
    log_file: Path | None = None,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Attach a console handler (stderr unless ``stream`` is given) and an optional file sink."""
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(stream)
    console.setLevel(level)
    console.setFormatter(StepFormatter(_CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is not None:
        sink = logging.FileHandler(log_file, encoding="utf-8")
        sink.setLevel(logging.DEBUG)
        sink.setFormatter(StepFormatter(_FILE_FORMAT))
        logger.addHandler(sink)

    return logger


def log_status(logger: logging.Logger, status: GenerationStatus) -> None:
    """Write one generation status; error statuses go out at ERROR level."""
    level = logging.ERROR if status.error else logging.INFO
    logger.log(level, "%s", status.message, extra={"step": status.step})


def status_logger(logger: logging.Logger) -> Callable[[GenerationStatus], None]:
    """Return an ``on_status`` callback that forwards statuses to ``logger``."""

    def _report(status: GenerationStatus) -> None:
        log_status(logger, status)

    return _report


__all__ = ["StepFormatter", "configure_logging", "get_logger", "log_status", "status_logger"]
