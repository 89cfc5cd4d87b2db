"""Base structured logging utilities for the registry, CLI and bridge.

Rationale:
- Central place to configure consistent JSON (or plain) logging.
- All handlers write to stderr: the bridge server owns stdout for its wire
  protocol, so nothing in this package may log there.

``log_event`` emits one structured payload per call; ``normalized_log_event``
wraps it and guarantees the canonical keys ``structured``, ``phase``,
``attempt``, ``error_code`` (omitted when ``None``) and ``emitted``.
"""
from __future__ import annotations

import contextlib
import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Optional

from ..config.defaults import ENV_LOG_LEVEL
from .log_support import JsonFormatter, LogContext

BASE_LOGGER_NAME = "lmi_providers"

_BASE_LOGGER_ATTR = "_lmi_logger_initialized"
_CONSOLE_HANDLER_ATTR = "_lmi_console_handler"
_FILE_HANDLER_ATTR = "_lmi_file_handler"
_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _parse_level(value: str | None, default: int = logging.INFO) -> int:
    """Parse a logging level name; unknown values fall back to ``default``."""
    if not value:
        return default
    mapping = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARN": logging.WARNING,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return mapping.get(value.strip().upper(), default)


def _formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(_PLAIN_FORMAT)


def _console_handler(level: int, json_mode: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(_formatter(json_mode))
    setattr(handler, _CONSOLE_HANDLER_ATTR, True)
    return handler


def _ensure_base_logger(json_mode: bool, level: int) -> logging.Logger:
    """Initialize (or refresh) and return the shared package logger.

    On repeated calls the console handler is re-pointed at the current
    ``sys.stderr`` so that replaced or closed streams (pytest capture, daemon
    redirects) never swallow records.
    """
    logger = logging.getLogger(BASE_LOGGER_NAME)
    desired_level = _parse_level(os.getenv(ENV_LOG_LEVEL), default=level)

    if not getattr(logger, _BASE_LOGGER_ATTR, False):
        logger.setLevel(desired_level)
        logger.handlers[:] = [_console_handler(desired_level, json_mode)]
        logger.propagate = False
        setattr(logger, _BASE_LOGGER_ATTR, True)
        return logger

    if os.getenv(ENV_LOG_LEVEL):
        logger.setLevel(desired_level)
    desired_level = logger.level
    for existing in list(logger.handlers):
        if not getattr(existing, _CONSOLE_HANDLER_ATTR, False):
            continue
        stream_obj = getattr(existing, "stream", None)
        if stream_obj is None or getattr(stream_obj, "closed", False):
            logger.removeHandler(existing)
            with contextlib.suppress(Exception):
                existing.close()
            logger.addHandler(_console_handler(desired_level, json_mode))
            continue
        existing.setLevel(desired_level)
        if isinstance(existing, logging.StreamHandler) and existing.stream is not sys.stderr:
            existing.setStream(sys.stderr)
        if json_mode != isinstance(existing.formatter, JsonFormatter):
            existing.setFormatter(_formatter(json_mode))
    return logger


def get_logger(name: str = BASE_LOGGER_NAME, json_mode: bool = True, level: int = logging.INFO) -> logging.Logger:
    """Return ``name`` as a child of the shared package logger."""
    base_logger = _ensure_base_logger(json_mode=json_mode, level=level)
    if name == BASE_LOGGER_NAME:
        return base_logger
    if not name.startswith(BASE_LOGGER_NAME + "."):
        name = f"{BASE_LOGGER_NAME}.{name}"
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    return logger


def configure_logger(
    *,
    level: int | str | None = None,
    file_path: Optional[str] = None,
    json_mode: bool = True,
) -> logging.Logger:
    """Reconfigure the shared logger at runtime.

    Parameters
    ----------
    level: int | str | None
        Desired level (number or name). ``None`` keeps the current level.
    file_path: Optional[str]
        When given, attach (or reuse) a rotating file handler writing to
        ``file_path``. When ``None``, any file handler previously attached by
        this function is removed.
    json_mode: bool
        JSON formatter (default) or plain text for the file handler.

    Returns
    -------
    logging.Logger
        The shared package logger.
    """
    logger = get_logger(BASE_LOGGER_NAME, json_mode=json_mode)

    if level is not None:
        logger.setLevel(_parse_level(level, default=logger.level) if isinstance(level, str) else level)
        for h in logger.handlers:
            h.setLevel(logger.level)

    managed = [h for h in logger.handlers if getattr(h, _FILE_HANDLER_ATTR, False)]
    if file_path is None:
        for h in managed:
            logger.removeHandler(h)
            with contextlib.suppress(Exception):
                h.close()
        return logger

    abs_path = os.path.abspath(os.path.expanduser(file_path))
    os.makedirs(os.path.dirname(abs_path), exist_ok=True)

    existing: Optional[logging.FileHandler] = None
    for h in managed:
        if isinstance(h, logging.FileHandler) and h.baseFilename == abs_path:
            existing = h
        else:
            logger.removeHandler(h)
            with contextlib.suppress(Exception):
                h.close()

    if existing is None:
        existing = RotatingFileHandler(abs_path, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8")
        setattr(existing, _FILE_HANDLER_ATTR, True)
        logger.addHandler(existing)
    existing.setFormatter(_formatter(json_mode))
    existing.setLevel(logger.level)
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    keep_none: bool = False,
    **fields: Any,
) -> None:
    """Emit a structured log event.

    Keys with ``None`` values are dropped unless ``keep_none`` is set. The
    payload is serialized as a single JSON string so it survives any handler.
    """
    payload: Dict[str, Any] = {"event": event}
    if ctx:
        payload |= ctx.to_dict()
    if keep_none:
        payload.update(fields)
    else:
        payload.update({k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


REQUIRED_NORMALIZED_KEYS = (
    "structured",
    "phase",
    "attempt",
    "error_code",
    "emitted",
)


def normalized_log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    phase: str,
    attempt: int | None = None,
    error_code: str | None = None,
    emitted: bool | None = None,
    level: int = logging.INFO,
    **extra_fields: Any,
) -> None:
    """Emit an event carrying the normalized key set.

    ``error_code`` is omitted when ``None``; the other required keys are always
    present (``null`` when unknown). ``extra_fields`` never overwrite them.
    """
    base_fields: Dict[str, Any] = {
        "structured": True,
        "phase": phase,
        "attempt": attempt,
        "emitted": emitted,
    }
    if error_code is not None:
        base_fields["error_code"] = error_code
    for k, v in extra_fields.items():
        if v is None or k in base_fields:
            continue
        base_fields[k] = v
    log_event(logger, event, ctx, level=level, keep_none=True, **base_fields)


__all__ = [
    "BASE_LOGGER_NAME",
    "LogContext",
    "get_logger",
    "configure_logger",
    "log_event",
    "normalized_log_event",
    "REQUIRED_NORMALIZED_KEYS",
]
