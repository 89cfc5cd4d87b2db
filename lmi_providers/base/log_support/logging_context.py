"""Structured logging context for registry and bridge events.

:class:`LogContext` carries the fields most events share (provider, model,
request sequence number) plus a free-form ``extra`` mapping. ``to_dict``
flattens ``extra`` and prunes ``None`` values.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict, field
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Structured context for provider and bridge logging events."""

    provider: Optional[str] = None
    model: Optional[str] = None
    request_seq: Optional[int] = None
    request_type: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        extra = data.pop("extra", {}) or {}
        data.update({k: v for k, v in extra.items() if v is not None})
        return {k: v for k, v in data.items() if v is not None}


__all__ = ["LogContext"]
