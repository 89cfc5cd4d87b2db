"""
Domain models (DTOs) public surface.

Re-exports the one-class-per-file implementations under
``lmi_providers.base.models_parts``.
"""

from .models_parts.provider_config import ProviderConfig
from .models_parts.model_info import ModelInfo
from .models_parts.bridge_response import BridgeResponse

__all__ = [
    "ProviderConfig",
    "ModelInfo",
    "BridgeResponse",
]
