"""One-class-per-file domain models; import from ``lmi_providers.base.models``."""

from .provider_config import ProviderConfig
from .model_info import ModelInfo
from .bridge_response import BridgeResponse

__all__ = ["ProviderConfig", "ModelInfo", "BridgeResponse"]
