"""OpenAI-compatible invoker covering every cataloged backend."""

from .client import ClientFactory, OpenAICompatibleInvoker

__all__ = ["ClientFactory", "OpenAICompatibleInvoker"]
