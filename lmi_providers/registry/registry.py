"""Provider registry: canonical configs derived from the catalog.

Every catalog entry becomes exactly one :class:`ProviderConfig` under the
namespaced id ``lmi_<key>``. Derivation is a pure function of the catalog and
the hint table, so re-deriving the same catalog always yields equal records.

Public API
----------
* derive(catalog, hints=CREDENTIAL_HINTS) -> dict[str, ProviderConfig]
* lookup_hint(key, display_name=None, hints=CREDENTIAL_HINTS) -> str
* is_namespaced(provider_id) -> bool
* strip_namespace(provider_id) -> str
* ProviderRegistry (resolve / lookup_hint / merged_ids over one catalog)
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional

from pydantic import ValidationError

from ..base.dto.catalog_entry import CatalogEntry
from ..base.errors import ConfigurationError
from ..base.logging import get_logger, log_event
from ..base.models import ProviderConfig
from ..config.defaults import BRIDGE_WIRE_PROTOCOL, GENERIC_HINT_TEMPLATE, PROVIDER_NAMESPACE_PREFIX
from .catalog_loader import format_validation_error, load_catalog
from .hints import CREDENTIAL_HINTS

_logger = get_logger("registry")


def is_namespaced(provider_id: str) -> bool:
    """Return True when ``provider_id`` is routed through the bridge."""
    return provider_id.startswith(PROVIDER_NAMESPACE_PREFIX)


def namespaced_id(key: str) -> str:
    return PROVIDER_NAMESPACE_PREFIX + key


def strip_namespace(provider_id: str) -> str:
    """Return the bare key for a namespaced id; other ids pass through unchanged.

    Only the leading prefix is removed, so ``lmi_lmi_x`` becomes ``lmi_x``.
    """
    if is_namespaced(provider_id):
        return provider_id[len(PROVIDER_NAMESPACE_PREFIX):]
    return provider_id


def lookup_hint(
    key: str,
    display_name: Optional[str] = None,
    hints: Mapping[str, str] = CREDENTIAL_HINTS,
) -> str:
    """Return the credential-acquisition hint for ``key``.

    Cataloged keys return their table entry. Any other key gets the generic
    hint built from ``display_name`` (or the key itself). Never empty.
    """
    hint = hints.get(key)
    if hint:
        return hint
    return GENERIC_HINT_TEMPLATE.format(display_name=display_name or key)


def derive_config(
    key: str,
    entry: CatalogEntry,
    hints: Mapping[str, str] = CREDENTIAL_HINTS,
) -> ProviderConfig:
    """Build the canonical record for one catalog entry."""
    return ProviderConfig(
        id=namespaced_id(key),
        key=key,
        display_name=entry.name,
        base_url=entry.base_url,
        credential_env_var=entry.env_key,
        credential_hint=lookup_hint(key, entry.name, hints),
        wire_protocol=BRIDGE_WIRE_PROTOCOL,
        requires_host_auth=entry.requires_openai_auth,
    )


def derive(
    catalog: Mapping[str, CatalogEntry],
    hints: Mapping[str, str] = CREDENTIAL_HINTS,
) -> Dict[str, ProviderConfig]:
    """Derive one :class:`ProviderConfig` per catalog entry, keyed by id.

    Catalog order is preserved. Raw mappings are accepted as entries and
    validated on the way in; an invalid one raises ``ConfigurationError``.
    """
    out: Dict[str, ProviderConfig] = {}
    for key, entry in catalog.items():
        if not isinstance(entry, CatalogEntry):
            try:
                entry = CatalogEntry.model_validate(entry)
            except ValidationError as exc:
                raise ConfigurationError(
                    f"invalid catalog entry '{key}': {format_validation_error(exc)}", source=key
                ) from exc
        cfg = derive_config(key, entry, hints)
        out[cfg.id] = cfg
    return out


class ProviderRegistry:
    """Immutable view over the configs derived from one catalog.

    Iteration yields :class:`ProviderConfig` records in catalog order.
    """

    def __init__(
        self,
        catalog: Mapping[str, CatalogEntry],
        hints: Mapping[str, str] = CREDENTIAL_HINTS,
    ) -> None:
        self._catalog: Mapping[str, CatalogEntry] = MappingProxyType(dict(catalog))
        self._hints = hints
        self._configs: Mapping[str, ProviderConfig] = MappingProxyType(derive(self._catalog, hints))
        log_event(_logger, "registry.derive", level=logging.DEBUG, providers=len(self._configs))

    @classmethod
    def load(cls, path: Optional[str] = None) -> "ProviderRegistry":
        """Build a registry from :func:`load_catalog` (bundled or external file)."""
        return cls(load_catalog(path))

    @property
    def catalog(self) -> Mapping[str, CatalogEntry]:
        return self._catalog

    @property
    def configs(self) -> Mapping[str, ProviderConfig]:
        return self._configs

    def __iter__(self) -> Iterator[ProviderConfig]:
        return iter(self._configs.values())

    def __len__(self) -> int:
        return len(self._configs)

    def __contains__(self, provider_id: object) -> bool:
        return isinstance(provider_id, str) and self.resolve(provider_id) is not None

    def ids(self) -> List[str]:
        return list(self._configs)

    def keys(self) -> List[str]:
        """Bare catalog keys, in catalog order."""
        return list(self._catalog)

    def resolve(self, provider_id: str) -> Optional[ProviderConfig]:
        """Return the config for a namespaced id, or ``None`` when not found.

        Ids without the ``lmi_`` prefix and ids whose suffix is not cataloged
        both resolve to ``None``; this never raises for unknown ids.
        """
        if not is_namespaced(provider_id):
            return None
        key = strip_namespace(provider_id)
        if key not in self._catalog:
            return None
        return self._configs.get(namespaced_id(key))

    def by_key(self, key: str) -> Optional[ProviderConfig]:
        """Return the config for a bare catalog key."""
        return self._configs.get(namespaced_id(key))

    def lookup_hint(self, key: str) -> str:
        entry = self._catalog.get(key)
        return lookup_hint(key, entry.name if entry else None, self._hints)

    def merged_ids(self, native_ids: Iterable[str]) -> List[str]:
        """Return bridge ids followed by the host's native ids.

        Raises
        ------
        ConfigurationError
            When a native id carries the bridge prefix or duplicates another id.
        """
        merged = self.ids()
        seen = set(merged)
        for native in native_ids:
            if is_namespaced(native):
                raise ConfigurationError(
                    f"native provider id '{native}' uses the reserved '{PROVIDER_NAMESPACE_PREFIX}' prefix"
                )
            if native in seen:
                raise ConfigurationError(f"duplicate provider id '{native}'")
            seen.add(native)
            merged.append(native)
        return merged


__all__ = [
    "ProviderRegistry",
    "derive",
    "derive_config",
    "lookup_hint",
    "is_namespaced",
    "namespaced_id",
    "strip_namespace",
]
