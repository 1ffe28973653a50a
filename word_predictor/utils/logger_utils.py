# logger_utils.py - logging setup plus metric and timing helpers

from __future__ import annotations

import logging
import time
from typing import Optional

from rich.logging import RichHandler

ROOT_LOGGER = "word_predictor"
LOG_FORMAT = "%(asctime)s %(levelname)-7s | %(name)s | %(message)s"

logger = logging.getLogger(ROOT_LOGGER)
logger.addHandler(logging.NullHandler())

_metric_logger = logging.getLogger(ROOT_LOGGER + ".metrics")


def configure_logging(
    level: int = logging.INFO,
    path: Optional[str] = None,
    rich_console: bool = True,
) -> logging.Logger:
    """
    Attach handlers to the package logger.
    Console output goes through rich, `path` adds a plain file handler.
    Calling it again replaces the handlers installed by the previous call.
    """
    for h in list(logger.handlers):
        if getattr(h, "_word_predictor", False):
            logger.removeHandler(h)
            h.close()

    handlers = []
    if rich_console:
        handlers.append(RichHandler(show_path=False, markup=False))
    if path:
        fh = logging.FileHandler(path, encoding="utf-8")
        fh.setFormatter(logging.Formatter(LOG_FORMAT, "%Y-%m-%d %H:%M:%S"))
        handlers.append(fh)

    for h in handlers:
        h._word_predictor = True  # type: ignore[attr-defined]
        logger.addHandler(h)
    logger.setLevel(level)
    return logger


class Log:
    """Shorthands for one-off messages and metrics outside a module logger."""

    @staticmethod
    def write(msg: str, level: int = logging.INFO) -> None:
        logger.log(level, msg)

    @staticmethod
    def metric(tag: str, value, unit: str = "") -> None:
        """
        Record a metric line, e.g. "update doc=1 done: 0.41ms".
        Logged at DEBUG so hot paths stay quiet unless asked.
        """
        _metric_logger.debug("%s: %s%s", tag, value, unit)

    @staticmethod
    def time_block(label: str) -> "_Timer":
        """
        Measure a code block and log its duration:
            with Log.time_block("rebuild"):
                do_work()
        The elapsed milliseconds are available as `.elapsed_ms` afterwards.
        """
        return _Timer(label)


class _Timer:
    """Context manager used by Log.time_block."""

    def __init__(self, label: str):
        self.label = label
        self.start = 0.0
        self.elapsed_ms = 0.0

    def __enter__(self) -> "_Timer":
        self.start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.elapsed_ms = (time.perf_counter() - self.start) * 1000.0
        Log.metric(f"{self.label} done", round(self.elapsed_ms, 3), "ms")
