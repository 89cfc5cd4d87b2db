"""lmi_providers.config.defaults
============================

Central place for small, stable default values used across the lmi_providers
package, the bridge server and the setup CLI. These defaults can be overridden
via environment variables where noted, but provide sensible fallbacks for local
development and tests.

Module Purpose
--------------
- Provide a single import location for conservative default constants (no I/O).
- Keep the registry, emitter and bridge layers free of magic literals.

This module intentionally avoids importing from other lmi_providers packages to
prevent circular dependencies. Only plain constants should live here.
"""

from __future__ import annotations

# ---- Provider namespace / wire protocol ----
# Prefix distinguishing bridge-routed provider ids from natively integrated ones.
PROVIDER_NAMESPACE_PREFIX = "lmi_"
# Wire protocol tag written for every provider produced by the registry.
BRIDGE_WIRE_PROTOCOL = "lmi_bridge"
# Table name that holds provider blocks in the host configuration document.
HOST_PROVIDERS_TABLE = "model_providers"
# Substring used to detect an already-merged host configuration document.
HOST_CONFIG_MARKER = f"[{HOST_PROVIDERS_TABLE}.{PROVIDER_NAMESPACE_PREFIX}"
# Comment line written above the merged provider blocks.
HOST_CONFIG_SECTION_COMMENT = "# Large Models Interface Providers"
# Generic credential hint template used when no cataloged hint exists.
GENERIC_HINT_TEMPLATE = "Get your API key from the {display_name} website"

# ---- Host configuration store ----
# Default location of the orchestrating host's configuration file.
HOST_CONFIG_DEFAULT_PATH = "~/.icodex/config.toml"

# ---- Catalog ----
# Bundled provider catalog shipped inside ``lmi_providers/catalog``.
CATALOG_RESOURCE_NAME = "providers.yaml"

# ---- Bridge server ----
# Default number of dispatch workers; 1 keeps the strictly serial loop.
BRIDGE_DEFAULT_WORKERS = 1
# Module executed by the bridge client when no explicit command is given.
BRIDGE_MODULE = "lmi_providers.bridge"

# ---- Invocation ----
# Attempts for the shared retry policy around provider calls.
INVOKER_DEFAULT_MAX_RETRIES = 2
# Placeholder credential sent to local backends that need no API key.
LOCAL_BACKEND_API_KEY = "sk-no-key-required"

# ---- Environment variable names ----
ENV_CATALOG_PATH = "LMI_PROVIDERS_CATALOG"
ENV_HOST_CONFIG = "LMI_HOST_CONFIG"
ENV_USE_MOCKS = "LMI_USE_MOCKS"
ENV_BRIDGE_WORKERS = "LMI_BRIDGE_WORKERS"
ENV_LOG_LEVEL = "LMI_LOG_LEVEL"
ENV_MAX_RETRIES = "LMI_MAX_RETRIES"


__all__ = [
    "PROVIDER_NAMESPACE_PREFIX",
    "BRIDGE_WIRE_PROTOCOL",
    "HOST_PROVIDERS_TABLE",
    "HOST_CONFIG_MARKER",
    "HOST_CONFIG_SECTION_COMMENT",
    "GENERIC_HINT_TEMPLATE",
    "HOST_CONFIG_DEFAULT_PATH",
    "CATALOG_RESOURCE_NAME",
    "BRIDGE_DEFAULT_WORKERS",
    "BRIDGE_MODULE",
    "INVOKER_DEFAULT_MAX_RETRIES",
    "LOCAL_BACKEND_API_KEY",
    "ENV_CATALOG_PATH",
    "ENV_HOST_CONFIG",
    "ENV_USE_MOCKS",
    "ENV_BRIDGE_WORKERS",
    "ENV_LOG_LEVEL",
    "ENV_MAX_RETRIES",
]
