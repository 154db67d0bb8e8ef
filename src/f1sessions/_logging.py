"""Session-resolution logging: a lazily created file logger and call decorator."""

from __future__ import annotations

import functools
import logging
import os
import threading
import time
from typing import Any, Awaitable, Callable, TypeVar

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])

LOGGER_NAME = "f1sessions.sessions"

_LOG_DIR = os.environ.get("F1SESSIONS_LOG_DIR", os.path.join(os.getcwd(), "logs"))
_LOG_FILE = os.path.join(_LOG_DIR, "sessions.log")

_logger: logging.Logger | None = None
_logger_lock = threading.Lock()


def _has_file_handler(logger: logging.Logger) -> bool:
    target = os.path.abspath(_LOG_FILE)
    return any(
        isinstance(h, logging.FileHandler) and h.baseFilename == target
        for h in logger.handlers
    )


def _open_handler() -> logging.Handler:
    """File handler for the session log, or a NullHandler if it cannot be opened."""
    try:
        os.makedirs(_LOG_DIR, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(_LOG_FILE, encoding="utf-8")
    except OSError:
        return logging.NullHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s | %(levelname)s | %(message)s"))
    return handler


def get_logger() -> logging.Logger:
    """Return the session logger, attaching its file handler on first use."""
    global _logger
    if _logger is not None:
        return _logger

    with _logger_lock:
        if _logger is None:
            logger = logging.getLogger(LOGGER_NAME)
            logger.setLevel(logging.DEBUG)
            logger.propagate = False
            # other handlers (e.g. a test runner's capture) do not replace the file
            if not _has_file_handler(logger):
                logger.addHandler(_open_handler())
            _logger = logger

    return _logger


def log_service_call(fn: F) -> F:
    """Decorator that logs orchestrator coroutine calls to the session log."""

    @functools.wraps(fn)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        logger = get_logger()
        # skip 'self'
        arg_parts = [repr(a) for a in args[1:]]
        arg_parts += [f"{k}={v!r}" for k, v in kwargs.items()]
        arg_str = ", ".join(arg_parts)
        logger.info("SERVICE CALL: %s(%s)", fn.__qualname__, arg_str)

        start = time.monotonic()
        try:
            result = await fn(*args, **kwargs)
        except Exception as exc:
            elapsed = time.monotonic() - start
            logger.error(
                "SERVICE FAIL: %s(%s) -> %s: %s (%.3fs)",
                fn.__qualname__, arg_str, type(exc).__name__, exc, elapsed,
            )
            raise
        elapsed = time.monotonic() - start
        logger.info(
            "SERVICE OK: %s(%s) -> %.3fs", fn.__qualname__, arg_str, elapsed,
        )
        return result

    return wrapper  # type: ignore[return-value]
