"""Protocols split into single-class modules."""

from .provider_invoker import ProviderInvoker

__all__ = ["ProviderInvoker"]
