"""Shared HTTP client pool for provider invocations.

Purpose:
    Provide a thread-safe pool of reusable ``httpx.Client`` instances so the
    openai SDK clients built per provider share connections instead of opening
    a fresh pool per call. Timeouts derive from :func:`get_timeout_config`.

Lifecycle & cleanup:
    - Clients are cached by a ``purpose`` string (e.g. ``"bridge"``).
    - The bridge server closes every pooled client during its shutdown
      cleanup via :func:`close_all_clients`; an ``atexit`` hook covers
      other processes.
"""

from __future__ import annotations

import atexit
import threading
from typing import Dict

import httpx

from ..timeouts import get_timeout_config

_CLIENTS: Dict[str, httpx.Client] = {}
_LOCK = threading.RLock()


def get_httpx_client(purpose: str) -> httpx.Client:
    """Return the pooled ``httpx.Client`` for ``purpose``, creating it once.

    Thread-safety:
        Safe for concurrent use; creation is guarded by a re-entrant lock.
    """
    client = _CLIENTS.get(purpose)
    if client is not None and not client.is_closed:
        return client

    with _LOCK:
        client = _CLIENTS.get(purpose)
        if client is not None and not client.is_closed:
            return client
        cfg = get_timeout_config()
        timeout = httpx.Timeout(cfg.http_timeout_seconds, connect=cfg.connect_timeout_seconds)
        client = httpx.Client(timeout=timeout)
        _CLIENTS[purpose] = client
        return client


def close_all_clients() -> None:
    """Close and forget every pooled client. Safe to call repeatedly."""
    with _LOCK:
        for c in _CLIENTS.values():
            try:
                c.close()
            except Exception:  # nosec B110 - teardown must not mask the exit path
                pass
        _CLIENTS.clear()


atexit.register(close_all_clients)

__all__ = ["get_httpx_client", "close_all_clients"]
