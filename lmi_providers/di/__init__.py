"""Composition root for the registry and the invoker."""
from __future__ import annotations

from .container import ProvidersContainer, build_container

__all__ = ["ProvidersContainer", "build_container"]
