"""Logging utilities for perfaudit runs."""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List

_LOGGER_NAME = "perfaudit"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the perfaudit hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Configure the perfaudit logger with console output and an optional file sink."""
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Drop stream/file handlers from earlier invocations; collectors stay attached.
    for handler in list(logger.handlers):
        if not isinstance(handler, WarningCollector):
            logger.removeHandler(handler)

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(logging.Formatter("[perfaudit] %(levelname)s %(message)s"))
    logger.addHandler(stream_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


class WarningCollector(logging.Handler):
    """Records warning-level messages so a run can report them in its result.

    Only records logged from the thread that created the collector are kept, so
    runs executing concurrently on other threads never see each other's warnings.
    """

    def __init__(self) -> None:
        super().__init__(level=logging.WARNING)
        self.thread_id = threading.get_ident()
        self.messages: List[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        if record.thread != self.thread_id:
            return
        self.messages.append(record.getMessage())


@contextmanager
def collect_warnings() -> Iterator[WarningCollector]:
    """Attach a `WarningCollector` to the perfaudit logger for the duration of a block."""
    logger = logging.getLogger(_LOGGER_NAME)
    collector = WarningCollector()
    logger.addHandler(collector)
    try:
        yield collector
    finally:
        logger.removeHandler(collector)


__all__ = ["WarningCollector", "collect_warnings", "configure_logging", "get_logger"]
