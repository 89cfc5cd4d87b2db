"""Timeout configuration for provider invocations.

``get_timeout_config()`` returns a process-cached :class:`TimeoutConfig`,
parsing environment overrides on first use (and again only when those
variables change). Supported environment variables (all optional):

    LMI_TIMEOUT_HTTP_SECONDS      overall read/write timeout per HTTP call
    LMI_TIMEOUT_CONNECT_SECONDS   TCP connect timeout

No other module in the package hard-codes network timeouts. There is no
per-request cancellation in the bridge; these values bound how long a single
provider call can hold the dispatch loop.
"""
from __future__ import annotations

import os
from dataclasses import dataclass

ENV_HTTP_TIMEOUT = "LMI_TIMEOUT_HTTP_SECONDS"
ENV_CONNECT_TIMEOUT = "LMI_TIMEOUT_CONNECT_SECONDS"


@dataclass(frozen=True)
class TimeoutConfig:
    """Normalized timeout values in seconds."""

    http_timeout_seconds: float = 120.0
    connect_timeout_seconds: float = 10.0


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float) -> float:
    """Read a positive float from ``name``; anything else yields ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached timeout configuration."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = f"{os.getenv(ENV_HTTP_TIMEOUT, '')}/{os.getenv(ENV_CONNECT_TIMEOUT, '')}"
    if _CACHED is not None and guard == _ENV_GUARD:
        return _CACHED
    defaults = TimeoutConfig()
    _CACHED = TimeoutConfig(
        http_timeout_seconds=_parse_env_float(ENV_HTTP_TIMEOUT, defaults.http_timeout_seconds),
        connect_timeout_seconds=_parse_env_float(ENV_CONNECT_TIMEOUT, defaults.connect_timeout_seconds),
    )
    _ENV_GUARD = guard
    return _CACHED


__all__ = ["TimeoutConfig", "get_timeout_config"]
