"""lmi_providers.config.env
======================

Environment helpers for provider credentials and boolean toggles.

Purpose
-------
- Resolve the credential for a provider from the environment variable named
  by its catalog entry, ignoring obvious placeholder values.
- Offer a small, consistent parser for boolean environment toggles.

Failure Modes
-------------
- Helpers never raise on unset variables; they return ``None``/``False`` and
  let callers decide how to proceed.
"""

from __future__ import annotations

import os
from typing import Optional

_TRUTHY = {"1", "t", "true", "y", "yes", "on"}


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the provided string looks like a placeholder/test value.

    Heuristics: contains 'placeholder', 'changeme', 'example', or starts with
    'test_'. The check is case-insensitive and resilient to surrounding spaces.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return (
        "placeholder" in v
        or "changeme" in v
        or "example" in v
        or v.startswith("test_")
    )


def resolve_credential(env_var: Optional[str]) -> Optional[str]:
    """Return the credential stored in ``env_var``.

    Parameters
    ----------
    env_var: Optional[str]
        Environment variable name from the provider's catalog entry. ``None``
        means the provider needs no credential.

    Returns
    -------
    Optional[str]
        The stripped value, or ``None`` when unset, empty or a placeholder.
    """
    if not env_var:
        return None
    value = (os.environ.get(env_var) or "").strip()
    if not value or is_placeholder(value):
        return None
    return value


def env_flag(name: str, default: bool = False) -> bool:
    """Interpret an environment variable as a boolean toggle."""
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUTHY


__all__ = [
    "is_placeholder",
    "resolve_credential",
    "env_flag",
]
