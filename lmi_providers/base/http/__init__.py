"""HTTP utilities for the providers layer."""

from .client import get_httpx_client, close_all_clients

__all__ = ["get_httpx_client", "close_all_clients"]
