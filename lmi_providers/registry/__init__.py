"""Provider registry: catalog loading, hint table and canonical configs."""

from .catalog_loader import default_catalog_path, load_catalog, parse_catalog
from .hints import CREDENTIAL_HINTS
from .registry import (
    ProviderRegistry,
    derive,
    derive_config,
    is_namespaced,
    lookup_hint,
    namespaced_id,
    strip_namespace,
)

__all__ = [
    "CREDENTIAL_HINTS",
    "ProviderRegistry",
    "default_catalog_path",
    "derive",
    "derive_config",
    "is_namespaced",
    "load_catalog",
    "lookup_hint",
    "namespaced_id",
    "parse_catalog",
    "strip_namespace",
]
