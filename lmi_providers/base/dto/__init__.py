"""DTO validation package (catalog entries and bridge requests)."""

from .bridge_request import (
    REQUEST_TYPES,
    BridgeRequest,
    ChatCompletionRequest,
    ListModelsRequest,
    ListProvidersRequest,
    RequestParseError,
    parse_request,
)
from .catalog_entry import CatalogEntry

__all__ = [
    "REQUEST_TYPES",
    "BridgeRequest",
    "ChatCompletionRequest",
    "ListModelsRequest",
    "ListProvidersRequest",
    "RequestParseError",
    "parse_request",
    "CatalogEntry",
]
