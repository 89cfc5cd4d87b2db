"""
Error classification helpers mapping exceptions to normalized ErrorCode values.

Order of precedence: ``ProviderError`` passthrough, timeout types, HTTP status
(``status_code``/``status``/``response.status_code``, as exposed by the openai
SDK and httpx), then message heuristics.
"""
from __future__ import annotations

import asyncio
from typing import Dict, Optional, Tuple

from .error_code import ErrorCode
from .provider_error import ProviderError

_HTTP_STATUS_MAP: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    409: ErrorCode.CONFLICT,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.TRANSIENT,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
}

# Checked in order; every pattern in a group must occur in the message.
_MESSAGE_PATTERNS: Tuple[Tuple[ErrorCode, Tuple[str, ...]], ...] = (
    (ErrorCode.RATE_LIMIT, ("rate", "limit")),
    (ErrorCode.TIMEOUT, ("timeout",)),
    (ErrorCode.TIMEOUT, ("timed out",)),
    (ErrorCode.AUTH, ("api key",)),
    (ErrorCode.AUTH, ("auth",)),
    (ErrorCode.AUTH, ("unauthorized",)),
    (ErrorCode.AUTH, ("forbidden",)),
    (ErrorCode.UNSUPPORTED, ("unsupported",)),
    (ErrorCode.UNSUPPORTED, ("not supported",)),
    (ErrorCode.NOT_FOUND, ("not found",)),
    (ErrorCode.NOT_FOUND, ("does not exist",)),
    (ErrorCode.CONFLICT, ("conflict",)),
    (ErrorCode.UNAVAILABLE, ("unavailable",)),
    (ErrorCode.UNAVAILABLE, ("connection",)),
    (ErrorCode.VALIDATION, ("invalid",)),
    (ErrorCode.VALIDATION, ("validation",)),
    (ErrorCode.VALIDATION, ("malformed",)),
    (ErrorCode.SERVER_ERROR, ("server error",)),
    (ErrorCode.SERVER_ERROR, ("internal error",)),
)


def _extract_status(exc: Exception) -> Optional[int]:
    """Return an HTTP status code carried by ``exc``, if any."""
    for attr in ("status_code", "status"):
        val = getattr(exc, attr, None)
        if isinstance(val, int) and 100 <= val < 600:
            return val
    resp = getattr(exc, "response", None)
    if resp is not None:
        sc = getattr(resp, "status_code", None)
        if isinstance(sc, int) and 100 <= sc < 600:
            return sc
    return None


def classify_message(message: str) -> ErrorCode:
    """Classify a bare error message (e.g. a bridge failure response)."""
    msg = (message or "").lower()
    for code, patterns in _MESSAGE_PATTERNS:
        if all(p in msg for p in patterns):
            return code
    return ErrorCode.UNKNOWN


def classify_exception(exc: Exception) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`."""
    if isinstance(exc, ProviderError):
        return exc.code
    if isinstance(exc, (TimeoutError, asyncio.TimeoutError)):
        return ErrorCode.TIMEOUT
    status = _extract_status(exc)
    if status is not None and status in _HTTP_STATUS_MAP:
        return _HTTP_STATUS_MAP[status]
    return classify_message(str(exc))


__all__ = [
    "classify_exception",
    "classify_message",
]
