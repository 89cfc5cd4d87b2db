"""
BridgeResponse: the single reply the bridge writes for every request line.

Wire shape::

    {"success": true, "data": <payload>}
    {"success": false, "error": "<message>"[, "stack": "<diagnostic>"]}
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional


def _json_default(obj: Any) -> Any:
    """Fallback serializer for provider payloads that are not plain JSON.

    Unknown types raise ``TypeError``; the bridge reports those as server errors.
    """
    dump = getattr(obj, "model_dump", None)
    if callable(dump):
        return dump(mode="json")
    to_dict = getattr(obj, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if isinstance(obj, (set, frozenset, tuple)):
        return list(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


@dataclass(frozen=True)
class BridgeResponse:
    """Outcome of one bridge request.

    Attributes:
        success: Whether the request succeeded.
        data: Payload on success.
        error: Message on failure.
        stack: Optional diagnostic trace for input and server-level failures.
    """

    success: bool
    data: Any = None
    error: Optional[str] = None
    stack: Optional[str] = None

    @classmethod
    def ok(cls, data: Any) -> "BridgeResponse":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str, stack: Optional[str] = None) -> "BridgeResponse":
        return cls(success=False, error=error, stack=stack)

    def to_dict(self) -> Dict[str, Any]:
        if self.success:
            return {"success": True, "data": self.data}
        out: Dict[str, Any] = {"success": False, "error": self.error or ""}
        if self.stack:
            out["stack"] = self.stack
        return out

    def to_line(self) -> str:
        """Serialize to one newline-terminated JSON line.

        ``ensure_ascii`` keeps the line free of raw U+2028/U+2029 so a host
        splitting on line terminators never sees a partial response.
        """
        return json.dumps(self.to_dict(), default=_json_default) + "\n"


__all__ = ["BridgeResponse"]
