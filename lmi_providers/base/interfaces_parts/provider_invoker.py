"""ProviderInvoker Protocol (single-class module).

The opaque provider-invocation capability the bridge dispatches to.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence, runtime_checkable


@runtime_checkable
class ProviderInvoker(Protocol):
    """Capability that performs the actual calls to model vendors.

    ``provider`` arguments are bare catalog keys (``"openai"``), never the
    namespaced ``lmi_`` ids. Implementations raise on failure (ideally a
    :class:`~lmi_providers.base.errors.ProviderError`); the bridge converts the
    exception into a failure response and keeps serving.
    """

    def chat_completion(
        self,
        provider: str,
        model: Optional[str],
        messages: Sequence[Any],
        options: Mapping[str, Any],
    ) -> Any:
        """Run one chat completion and return a JSON-serializable result."""
        ...

    def list_models(self, provider: str) -> List[Dict[str, Any]]:
        """Return the models offered by ``provider``."""
        ...

    def list_providers(self) -> List[str]:
        """Return the provider keys this invoker can reach."""
        ...

    def close(self) -> None:
        """Release held resources (connections, clients)."""
        ...
