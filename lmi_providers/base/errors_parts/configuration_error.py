"""Setup-time configuration failure (catalog or host config store)."""
from __future__ import annotations

from typing import Optional


class ConfigurationError(Exception):
    """Raised when the catalog or the host configuration store is unusable.

    These failures are terminal for the setup operation that hit them (the CLI
    prints a diagnostic and exits non-zero) and never affect a running bridge.

    Attributes:
        message: Human-readable diagnostic.
        source: Optional path or catalog key the failure relates to.
    """

    def __init__(self, message: str, *, source: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.source = source

    def __str__(self) -> str:
        return f"{self.message} ({self.source})" if self.source else self.message


__all__ = ["ConfigurationError"]
