"""Unified error taxonomy public surface.

Re-exports the one-class-per-file implementations under
``lmi_providers.base.errors_parts`` to keep a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import ProviderError
from .errors_parts.configuration_error import ConfigurationError
from .errors_parts.classification import classify_exception, classify_message

__all__ = ["ErrorCode", "ProviderError", "ConfigurationError", "classify_exception", "classify_message"]
