"""
ProviderConfig: the canonical per-provider record derived from the catalog.

Instances are produced only by :func:`lmi_providers.registry.derive` and are
immutable. Field names follow Python conventions; ``to_host_dict`` maps them
to the key names the orchestrating host reads from its configuration.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ...config.defaults import BRIDGE_WIRE_PROTOCOL


@dataclass(frozen=True)
class ProviderConfig:
    """Canonical configuration of one bridge-routed provider.

    Attributes:
        id: Namespaced external selector (``"lmi_" + key``).
        key: Bare catalog key (e.g. ``"openai"``).
        display_name: Human-readable provider name.
        base_url: Endpoint override; ``None`` means the invoker's default.
        credential_env_var: Environment variable holding the API key; ``None``
            for backends that need no credential (local inference servers).
        credential_hint: Instructions for obtaining the credential.
        wire_protocol: Always ``"lmi_bridge"`` for registry-derived records.
        requires_host_auth: Whether the host's own auth layer is also needed.
    """

    id: str
    key: str
    display_name: str
    base_url: Optional[str]
    credential_env_var: Optional[str]
    credential_hint: str
    wire_protocol: str = BRIDGE_WIRE_PROTOCOL
    requires_host_auth: bool = False

    @property
    def requires_credential(self) -> bool:
        return self.credential_env_var is not None

    def to_host_dict(self) -> Dict[str, Any]:
        """Return the record keyed the way the host configuration names fields."""
        return {
            "name": self.display_name,
            "base_url": self.base_url,
            "env_key": self.credential_env_var,
            "env_key_instructions": self.credential_hint,
            "wire_api": self.wire_protocol,
            "requires_openai_auth": self.requires_host_auth,
        }


__all__ = ["ProviderConfig"]
