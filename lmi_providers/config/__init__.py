"""Unified configuration layer for the registry, emitter and bridge.

Goals
-----
* Centralize defaults (see :mod:`lmi_providers.config.defaults`).
* Merge sources in a predictable order:
    1. Built-in defaults
    2. Optional ``.env`` file (``DOTENV_FILE``, default ``.env``)
    3. Environment variables
    4. In-code overrides passed to :func:`get_settings`
* Provide a single call site: ``get_settings()``.

Environment Variables
---------------------
LMI_PROVIDERS_CATALOG   Path to a JSON/YAML catalog replacing the bundled one.
LMI_HOST_CONFIG         Host configuration file used by ``add-to-config``.
LMI_USE_MOCKS           Route the bridge to the deterministic mock invoker.
LMI_BRIDGE_WORKERS      Dispatch workers for the bridge server (default 1).
LMI_LOG_LEVEL           Level for the shared ``lmi_providers`` logger.
LMI_MAX_RETRIES         Attempts for transient provider failures.

Public API
----------
* get_settings(overrides: dict | None = None) -> BridgeSettings
* host_config_path(explicit: str | None = None) -> Path
"""
from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional

from .defaults import (
    BRIDGE_DEFAULT_WORKERS,
    ENV_BRIDGE_WORKERS,
    ENV_CATALOG_PATH,
    ENV_HOST_CONFIG,
    ENV_LOG_LEVEL,
    ENV_MAX_RETRIES,
    ENV_USE_MOCKS,
    HOST_CONFIG_DEFAULT_PATH,
    INVOKER_DEFAULT_MAX_RETRIES,
)
from .env import env_flag, is_placeholder

_DOTENV_LOADED = False


@dataclass(frozen=True)
class BridgeSettings:
    """Resolved runtime settings.

    Attributes:
        catalog_path: External catalog file, or ``None`` for the bundled catalog.
        host_config_path: Host configuration file for ``add-to-config``.
        use_mocks: Route invocations to the fixture-backed mock invoker.
        workers: Bridge dispatch workers; ``1`` keeps the serial loop.
        log_level: Optional level name for the shared logger.
        max_retries: Attempts for transient provider failures.
    """

    catalog_path: Optional[str] = None
    host_config_path: str = HOST_CONFIG_DEFAULT_PATH
    use_mocks: bool = False
    workers: int = BRIDGE_DEFAULT_WORKERS
    log_level: Optional[str] = None
    max_retries: int = INVOKER_DEFAULT_MAX_RETRIES


def _load_dotenv_once() -> None:
    """Lightweight .env loader (no external dependency).

    Parses KEY=VALUE lines, ignoring comments and blank lines. Safe to call
    multiple times. Overrides existing environment variables only if their
    current values appear to be placeholders.
    """
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    path = os.getenv("DOTENV_FILE", ".env")
    if not os.path.isfile(path):
        _DOTENV_LOADED = True
        return
    try:
        with open(path, "r", encoding="utf-8") as fh:
            for line in fh:
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                if "=" not in line:
                    continue
                k, v = line.split("=", 1)
                k = k.strip()
                v = v.strip().strip('"').strip("'")
                if k and (k not in os.environ or is_placeholder(os.environ.get(k))):
                    os.environ[k] = v
    finally:
        _DOTENV_LOADED = True


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = int(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_settings(overrides: Optional[Dict[str, Any]] = None) -> BridgeSettings:
    """Return merged settings.

    Merge order (later wins): defaults -> .env -> env vars -> overrides.
    ``None`` values in ``overrides`` are ignored.
    """
    _load_dotenv_once()
    settings = BridgeSettings(
        catalog_path=os.getenv(ENV_CATALOG_PATH) or None,
        host_config_path=os.getenv(ENV_HOST_CONFIG) or HOST_CONFIG_DEFAULT_PATH,
        use_mocks=env_flag(ENV_USE_MOCKS),
        workers=_env_int(ENV_BRIDGE_WORKERS, BRIDGE_DEFAULT_WORKERS),
        log_level=os.getenv(ENV_LOG_LEVEL) or None,
        max_retries=_env_int(ENV_MAX_RETRIES, INVOKER_DEFAULT_MAX_RETRIES),
    )
    if overrides:
        settings = replace(settings, **{k: v for k, v in overrides.items() if v is not None})
    return settings


def host_config_path(explicit: Optional[str] = None) -> Path:
    """Return the expanded host configuration path.

    ``explicit`` (for example a ``--config`` flag) wins over the settings value.
    """
    raw = explicit or get_settings().host_config_path
    return Path(raw).expanduser()


__all__ = [
    "BridgeSettings",
    "get_settings",
    "host_config_path",
]
