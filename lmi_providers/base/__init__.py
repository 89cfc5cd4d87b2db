"""
Providers Base Package

Exports provider-agnostic contracts, DTOs, the error taxonomy and the invoker
factory used by the registry, the bridge and the setup CLI.
"""

from .dto import (
    BridgeRequest,
    CatalogEntry,
    ChatCompletionRequest,
    ListModelsRequest,
    ListProvidersRequest,
    RequestParseError,
    parse_request,
)
from .errors import ConfigurationError, ErrorCode, ProviderError, classify_exception, classify_message
from .factory import UnknownInvokerError, create_invoker
from .interfaces import ProviderInvoker
from .models import BridgeResponse, ModelInfo, ProviderConfig
from .timeouts import TimeoutConfig, get_timeout_config

__all__ = [
    "BridgeRequest",
    "CatalogEntry",
    "ChatCompletionRequest",
    "ListModelsRequest",
    "ListProvidersRequest",
    "RequestParseError",
    "parse_request",
    "ConfigurationError",
    "ErrorCode",
    "ProviderError",
    "classify_exception",
    "classify_message",
    "UnknownInvokerError",
    "create_invoker",
    "ProviderInvoker",
    "BridgeResponse",
    "ModelInfo",
    "ProviderConfig",
    "TimeoutConfig",
    "get_timeout_config",
]
