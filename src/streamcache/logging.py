"""
Structured logging for the stream metadata cache.

Provides:
- Context variables for batch_id and backend (using contextvars)
- JSONFormatter for machine-readable logs to file
- RichHandler for pretty console output
- ContextLogger wrapper that attaches context to all log calls
- setup_logging() that configures both file and console handlers
- reset_logging() that returns records to the host application
- Context manager log_context() for scoped context
- get_logger() factory
"""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Generator

from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text

_ROOT = "streamcache"

_batch_id_var: ContextVar[str | None] = ContextVar("batch_id", default=None)
_backend_var: ContextVar[str | None] = ContextVar("backend", default=None)


def get_batch_id() -> str | None:
    """Get the current batch ID from context."""
    return _batch_id_var.get()


def get_backend() -> str | None:
    """Get the current backend name from context."""
    return _backend_var.get()


@contextmanager
def log_context(
    batch_id: str | None = None,
    backend: str | None = None,
) -> Generator[None, None, None]:
    """Context manager for scoped logging context.

    Args:
        batch_id: Batch ID to set in context.
        backend: Backend name to set in context.

    Yields:
        None. Context variables are set for the duration of the context.
    """
    batch_token = _batch_id_var.set(batch_id) if batch_id is not None else None
    backend_token = _backend_var.set(backend) if backend is not None else None
    try:
        yield
    finally:
        if backend_token is not None:
            _backend_var.reset(backend_token)
        if batch_token is not None:
            _batch_id_var.reset(batch_token)


def _current_context() -> dict[str, str]:
    context: dict[str, str] = {}
    batch_id = get_batch_id()
    backend = get_backend()
    if batch_id:
        context["batch_id"] = batch_id
    if backend:
        context["backend"] = backend
    return context


class JSONFormatter(logging.Formatter):
    """JSON formatter for machine-readable log files.

    Produces JSON Lines format with structured context.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as JSON."""
        log_obj: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log_obj.update(_current_context())

        if hasattr(record, "extra"):
            log_obj["extra"] = record.extra

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_obj, default=str)


class ContextRichHandler(RichHandler):
    """Rich handler that includes context in console output."""

    def get_level_text(self, record: logging.LogRecord) -> Text:
        """Override to add context prefix."""
        level_text = super().get_level_text(record)

        parts: list[str] = []
        batch_id = get_batch_id()
        backend = get_backend()

        if batch_id:
            # Tail of a UUID7 is the random part
            parts.append(f"[dim]{batch_id[-8:]}[/dim]")
        if backend:
            parts.append(f"[cyan]{backend}[/cyan]")

        if parts:
            return Text.assemble(level_text, " ", Text.from_markup(" ".join(parts)))

        return level_text


class ContextLogger:
    """Logger wrapper that automatically attaches context to log calls.

    Keyword arguments other than the standard logging ones become structured
    fields on the record.
    """

    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    @property
    def name(self) -> str:
        """Get the logger name."""
        return self._logger.name

    def _log(
        self,
        level: int,
        msg: str,
        *args: Any,
        exc_info: bool = False,
        **kwargs: Any,
    ) -> None:
        extra = kwargs.pop("extra", {})
        extra.update(_current_context())

        for key in list(kwargs.keys()):
            if key not in ("stack_info", "stacklevel"):
                extra[key] = kwargs.pop(key)

        self._logger.log(level, msg, *args, exc_info=exc_info, extra={"extra": extra})

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log debug message."""
        self._log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log info message."""
        self._log(logging.INFO, msg, *args, **kwargs)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log warning message."""
        self._log(logging.WARNING, msg, *args, **kwargs)

    def error(self, msg: str, *args: Any, exc_info: bool = False, **kwargs: Any) -> None:
        """Log error message."""
        self._log(logging.ERROR, msg, *args, exc_info=exc_info, **kwargs)

    def exception(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log exception with traceback."""
        self._log(logging.ERROR, msg, *args, exc_info=True, **kwargs)


_console: Console | None = None

# Library default: no output of its own, records propagate to the host
logging.getLogger(_ROOT).addHandler(logging.NullHandler())


def get_console() -> Console:
    """Get the global rich console."""
    global _console
    if _console is None:
        _console = Console(stderr=True)
    return _console


def setup_logging(
    log_level: str = "INFO",
    log_file: Path | None = None,
    console_output: bool = True,
) -> None:
    """Set up logging with JSON file handler and rich console handler.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Path to log file. If None, only console logging is enabled.
        console_output: Whether to enable console output.
    Records stop propagating to the host's root logger once this is called.
    """
    root_logger = logging.getLogger(_ROOT)
    root_logger.setLevel(getattr(logging, log_level.upper()))
    _close_handlers(root_logger)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(JSONFormatter())
        file_handler.setLevel(logging.DEBUG)
        root_logger.addHandler(file_handler)

    if console_output:
        rich_handler = ContextRichHandler(
            console=get_console(),
            show_time=True,
            show_path=False,
            rich_tracebacks=True,
            tracebacks_show_locals=False,
            markup=False,
        )
        rich_handler.setLevel(getattr(logging, log_level.upper()))
        root_logger.addHandler(rich_handler)

    root_logger.propagate = False


def reset_logging() -> None:
    """Undo setup_logging() and hand records back to the host's logging."""
    root_logger = logging.getLogger(_ROOT)
    _close_handlers(root_logger)
    root_logger.addHandler(logging.NullHandler())
    root_logger.setLevel(logging.NOTSET)
    root_logger.propagate = True


def _close_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def setup_logging_from_settings() -> None:
    """Configure logging from LOG_LEVEL and LOG_FILE settings."""
    from streamcache.config import get_settings

    settings = get_settings()
    setup_logging(log_level=settings.LOG_LEVEL, log_file=settings.LOG_FILE)


def get_logger(name: str) -> ContextLogger:
    """Get a context-aware logger.

    Args:
        name: Logger name (usually __name__).

    Returns:
        ContextLogger wrapper around the standard logger.
    """
    if name != _ROOT and not name.startswith(f"{_ROOT}."):
        name = f"{_ROOT}.{name}"

    return ContextLogger(logging.getLogger(name))
