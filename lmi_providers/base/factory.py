"""Invoker factory.

Purpose
-------
Centralize creation of the ``ProviderInvoker`` the bridge dispatches to.
Implementations are imported lazily with ``importlib`` so importing the base
layer never pulls in the openai SDK.

Mock routing
------------
When ``LMI_USE_MOCKS`` is truthy (or ``use_mocks=True`` is passed) the
fixture-backed :class:`~lmi_providers.mock.MockInvoker` is returned, answering
for the registry's provider keys.
"""

from __future__ import annotations

from importlib import import_module
from typing import TYPE_CHECKING, Any, Dict, Optional

from ..config import get_settings

if TYPE_CHECKING:  # pragma: no cover
    from ..registry import ProviderRegistry


class UnknownInvokerError(Exception):
    """Raised when an invoker kind is not registered or cannot be imported."""


_INVOKERS: Dict[str, Dict[str, str]] = {
    "openai_compat": {"module": "lmi_providers.openai_compat.client", "class": "OpenAICompatibleInvoker"},
    "mock": {"module": "lmi_providers.mock.client", "class": "MockInvoker"},
}


def _load(kind: str) -> Any:
    entry = _INVOKERS.get(kind)
    if not entry:
        raise UnknownInvokerError(f"Unknown invoker '{kind}'")
    try:
        mod = import_module(entry["module"])
    except ImportError as exc:  # pragma: no cover - import failure path
        raise UnknownInvokerError(f"Failed to import module '{entry['module']}' for invoker '{kind}': {exc}") from exc
    return getattr(mod, entry["class"])


def create_invoker(
    registry: "ProviderRegistry",
    use_mocks: Optional[bool] = None,
    **kwargs: Any,
) -> Any:
    """Create the invoker for ``registry``.

    Parameters
    ----------
    registry:
        Provider registry whose catalog keys the invoker serves.
    use_mocks:
        Force (``True``) or forbid (``False``) the mock invoker; ``None``
        defers to ``LMI_USE_MOCKS``.
    **kwargs:
        Forwarded to the invoker constructor.
    """
    if use_mocks is None:
        use_mocks = get_settings().use_mocks
    if use_mocks:
        return _load("mock")(registry.keys(), **kwargs)
    return _load("openai_compat")(registry, **kwargs)


__all__ = ["UnknownInvokerError", "create_invoker"]
