"""
Pydantic DTOs for the bridge's inbound request lines.

Purpose
-------
Turn one raw input line into a validated request object, or into a
:class:`RequestParseError` that the bridge reports without dispatching.

The union is discriminated by ``type``:

* ``chat_completion``: ``provider`` (required), ``model``, ``messages``,
  ``options`` (``null`` is treated as ``{}``), optional ``tools``.
* ``list_models``: ``provider`` (required).
* ``list_providers``: no fields.

Unknown extra fields are ignored so older and newer hosts interoperate.
"""

from __future__ import annotations

import json
import traceback
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


class RequestParseError(ValueError):
    """Raised when a line cannot become a request.

    Attributes:
        message: Short error reported in the failure response.
        detail: Diagnostic written to the response's ``stack`` field.
    """

    def __init__(self, message: str, detail: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class _BridgeRequestBase(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class ChatCompletionRequest(_BridgeRequestBase):
    """Chat completion against ``provider``/``model``."""

    type: Literal["chat_completion"] = "chat_completion"
    provider: str = Field(..., min_length=1)
    model: Optional[str] = None
    messages: List[Any] = Field(default_factory=list)
    options: Dict[str, Any] = Field(default_factory=dict)
    tools: Optional[List[Any]] = None

    @field_validator("options", mode="before")
    @classmethod
    def _null_options(cls, v: Any) -> Any:
        return {} if v is None else v

    @field_validator("messages", mode="before")
    @classmethod
    def _null_messages(cls, v: Any) -> Any:
        return [] if v is None else v

    def invocation_options(self) -> Dict[str, Any]:
        """Options forwarded to the invoker; top-level ``tools`` folds in."""
        opts = dict(self.options)
        if self.tools is not None:
            opts.setdefault("tools", list(self.tools))
        return opts


class ListModelsRequest(_BridgeRequestBase):
    """List the models offered by ``provider``."""

    type: Literal["list_models"] = "list_models"
    provider: str = Field(..., min_length=1)


class ListProvidersRequest(_BridgeRequestBase):
    """List the providers known to the invoker."""

    type: Literal["list_providers"] = "list_providers"


BridgeRequest = Union[ChatCompletionRequest, ListModelsRequest, ListProvidersRequest]

REQUEST_TYPES: Dict[str, type[_BridgeRequestBase]] = {
    "chat_completion": ChatCompletionRequest,
    "list_models": ListModelsRequest,
    "list_providers": ListProvidersRequest,
}


def _summarize(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "request"
        parts.append(f"{loc}: {err.get('msg', 'invalid')}")
    return "; ".join(parts)


def parse_request(line: str) -> BridgeRequest:
    """Parse and validate one input line.

    Raises
    ------
    RequestParseError
        ``"parse error"`` for malformed or non-object JSON (blank lines
        included), ``"unknown request type: ..."`` for an unrecognized
        ``type``, ``"invalid request: ..."`` for field validation failures.
    """
    try:
        obj = json.loads(line)
    except ValueError as exc:
        detail = "".join(traceback.format_exception_only(type(exc), exc))
        raise RequestParseError("parse error", detail) from exc
    if not isinstance(obj, dict):
        raise RequestParseError("parse error", f"expected a JSON object, got {type(obj).__name__}")

    req_type = obj.get("type")
    model_cls = REQUEST_TYPES.get(req_type) if isinstance(req_type, str) else None
    if model_cls is None:
        raise RequestParseError(f"unknown request type: {req_type!r}", f"known types: {', '.join(REQUEST_TYPES)}")

    try:
        return model_cls.model_validate(obj)  # type: ignore[return-value]
    except ValidationError as exc:
        raise RequestParseError(f"invalid request: {_summarize(exc)}", str(exc)) from exc


__all__ = [
    "RequestParseError",
    "ChatCompletionRequest",
    "ListModelsRequest",
    "ListProvidersRequest",
    "BridgeRequest",
    "REQUEST_TYPES",
    "parse_request",
]
