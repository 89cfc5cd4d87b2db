"""lmi_providers package

Provider registry and dispatch bridge for Large Models Interface providers.

Purpose:
    Derive canonical provider configurations from a static catalog, emit them
    as host configuration blocks, and serve chat-completion / model-listing
    requests to many OpenAI-compatible backends through a newline-delimited
    JSON bridge subprocess.

Public API (re-exported):
    - Version: ``__version__``
    - Exceptions: :class:`ProviderError`, :class:`ErrorCode`,
      :class:`ConfigurationError`
    - Registry: :class:`ProviderRegistry`, :class:`ProviderConfig`,
      :func:`derive`, :func:`lookup_hint`, :func:`is_namespaced`
    - Emitter: :func:`render`, :func:`merge`
    - Bridge: :class:`BridgeServer`, :class:`BridgeClient`
    - Invokers: :class:`ProviderInvoker`, :func:`create_invoker`
"""

from .base.errors import ConfigurationError, ErrorCode, ProviderError
from .base.factory import create_invoker
from .base.interfaces import ProviderInvoker
from .base.models import BridgeResponse, ModelInfo, ProviderConfig
from .bridge import BridgeClient, BridgeServer
from .registry import CREDENTIAL_HINTS, ProviderRegistry, derive, is_namespaced, lookup_hint, strip_namespace
from .service.config_emitter import MergeResult, merge, render

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Exceptions
    "ConfigurationError",
    "ErrorCode",
    "ProviderError",
    # Registry
    "CREDENTIAL_HINTS",
    "ProviderConfig",
    "ProviderRegistry",
    "derive",
    "is_namespaced",
    "lookup_hint",
    "strip_namespace",
    # Emitter
    "MergeResult",
    "merge",
    "render",
    # Bridge and invocation
    "BridgeClient",
    "BridgeResponse",
    "BridgeServer",
    "ModelInfo",
    "ProviderInvoker",
    "create_invoker",
]
