"""
Provider-agnostic interfaces (Protocols) for the invocation layer.

Re-exports the single-class modules under
``lmi_providers.base.interfaces_parts`` to keep imports stable.
"""

from __future__ import annotations

from .interfaces_parts import ProviderInvoker

__all__ = ["ProviderInvoker"]
