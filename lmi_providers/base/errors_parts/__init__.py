"""Errors parts package; prefer importing from ``lmi_providers.base.errors``."""

from .error_code import ErrorCode
from .provider_error import ProviderError
from .configuration_error import ConfigurationError
from .classification import classify_exception, classify_message

__all__ = ["ErrorCode", "ProviderError", "ConfigurationError", "classify_exception", "classify_message"]
