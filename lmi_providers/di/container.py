"""Minimal dependency injection container for the bridge and setup CLI.

Goals:
- Centralize construction of the provider registry and the invoker.
- Let the CLI and the bridge entry point share one composition root, and let
  tests swap either piece without touching call sites.
"""

from __future__ import annotations

from typing import Any, Dict

from ..base.factory import create_invoker
from ..base.interfaces import ProviderInvoker
from ..config import BridgeSettings, get_settings
from ..registry import ProviderRegistry


class ProvidersContainer:
    """Dependency injection container caching the registry and the invoker."""

    def __init__(self, config: Dict[str, Any] | None = None) -> None:
        """Initialize the container.

        Args:
            config: Optional overrides merged into :func:`get_settings`
                (for example ``{"use_mocks": True, "catalog_path": "x.yaml"}``).
        """
        self._config = config or {}
        self._singletons: Dict[str, Any] = {}

    def settings(self) -> BridgeSettings:
        if "settings" not in self._singletons:
            self._singletons["settings"] = get_settings(self._config)
        return self._singletons["settings"]

    def registry(self) -> ProviderRegistry:
        """Return the shared registry, loading the catalog on first use."""
        if "registry" not in self._singletons:
            self._singletons["registry"] = ProviderRegistry.load(self.settings().catalog_path)
        return self._singletons["registry"]

    def invoker(self) -> ProviderInvoker:
        """Return the shared invoker (mock or OpenAI-compatible per settings)."""
        if "invoker" not in self._singletons:
            self._singletons["invoker"] = create_invoker(self.registry(), use_mocks=self.settings().use_mocks)
        return self._singletons["invoker"]

    def clear(self) -> None:  # testing convenience
        self._singletons.clear()


def build_container(config: Dict[str, Any] | None = None) -> ProvidersContainer:
    """Construct and return a new :class:`ProvidersContainer`."""
    return ProvidersContainer(config=config)


__all__ = ["ProvidersContainer", "build_container"]
