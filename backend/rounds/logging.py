"""structlog setup for the game store.

structlog events are rendered by stdlib handlers: one on stdout and, when
``log_dir`` is configured, one datetime-stamped file per process.
"""

from __future__ import annotations

import logging
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from rounds.settings import LogFormat, RoundsSettings

LOG_FILE_TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"

# Shared by every event before it reaches a handler. format_exc_info is left
# to the handler formatter so tracebacks are rendered once per handler.
_PRE_CHAIN = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]


def _is_test() -> bool:
    return "pytest" in sys.modules


def _renderer(log_format: LogFormat, *, colors: bool) -> structlog.typing.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=colors)


def _handler(handler: logging.Handler, log_format: LogFormat, *, colors: bool) -> logging.Handler:
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.format_exc_info,
                _renderer(log_format, colors=colors),
            ],
        ),
    )
    return handler


def _log_file_path(log_dir: str) -> Path:
    dir_path = Path(log_dir)
    dir_path.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now(tz=UTC).strftime(LOG_FILE_TIMESTAMP_FORMAT)
    return dir_path / f"{timestamp}.log"


def setup_logging(settings: RoundsSettings) -> Path | None:
    """Route structlog through the root logger as ``settings`` describes.

    Replaces any handlers already on the root logger. Returns the log file
    path when ``settings.log_dir`` is set (never under pytest), else None.
    """
    structlog.configure(
        processors=[*_PRE_CHAIN, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(settings.log_level)
    root_logger.handlers.clear()
    root_logger.addHandler(
        _handler(logging.StreamHandler(sys.stdout), settings.log_format, colors=sys.stdout.isatty()),
    )

    if settings.log_dir is None or _is_test():
        return None

    file_path = _log_file_path(settings.log_dir)
    root_logger.addHandler(_handler(logging.FileHandler(file_path), settings.log_format, colors=False))
    return file_path
