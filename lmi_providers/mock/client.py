"""Deterministic mock invoker backed by JSON fixtures for offline testing.

Purpose
-------
Implement the ``ProviderInvoker`` contract without any network traffic so the
bridge server, the bridge client and the CLI can be exercised end to end.
Responses come from ``lmi_providers/mock/fixtures/bridge_fixtures.json``.

Fixture lookup
--------------
The provider block is selected by key with a ``"*"`` wildcard fallback. The
response is selected by the content of the last message (exact, then
lower-cased, then ``"*"``), first in the provider block and then in the
wildcard block.

Latency
-------
``latency`` (seconds) delays every call; a per-request ``mock_latency`` option
overrides it. Used to exercise response ordering under varying latencies.
"""

from __future__ import annotations

import json
import time
from importlib import resources
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from ..base.errors import ErrorCode, ProviderError
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import ModelInfo

_FIXTURE_RESOURCE = "bridge_fixtures.json"


def load_fixture_catalog(resource: str = _FIXTURE_RESOURCE) -> Dict[str, Any]:
    """Load the JSON fixture catalog bundled with the mock invoker.

    Parameters
    ----------
    resource: str, default ``bridge_fixtures.json``
        Name of the resource file located under ``lmi_providers.mock.fixtures``.

    Returns
    -------
    Dict[str, Any]
        Parsed JSON catalog describing provider defaults, models and responses.
    """

    package = "lmi_providers.mock.fixtures"
    data = resources.files(package).joinpath(resource).read_text(encoding="utf-8")
    return json.loads(data)


class MockInvoker:
    """Invoker that returns canned responses from fixtures instead of live APIs."""

    def __init__(
        self,
        providers: Optional[Iterable[str]] = None,
        *,
        catalog: Optional[Dict[str, Any]] = None,
        latency: float = 0.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize the mock invoker.

        Parameters
        ----------
        providers: Optional[Iterable[str]]
            Provider keys this invoker answers for (normally the registry
            keys). Defaults to the named provider blocks of the fixture catalog.
        catalog: Optional[Dict[str, Any]]
            Pre-parsed fixture catalog; tests inject custom catalogs this way.
        latency: float, default ``0.0``
            Seconds to sleep before answering each call.
        sleep: Callable[[float], None]
            Sleep function, replaceable in tests.
        """
        self._catalog = catalog or load_fixture_catalog()
        blocks: Mapping[str, Any] = self._catalog.get("providers", {})
        self._blocks = blocks
        self._fallback: Mapping[str, Any] = blocks.get("*", {})
        if providers is None:
            providers = [k for k in blocks if k != "*"]
        self._providers: List[str] = list(providers)
        self._latency = latency
        self._sleep = sleep
        self._logger = get_logger("mock")

    def list_providers(self) -> List[str]:
        return list(self._providers)

    def list_models(self, provider: str) -> List[Dict[str, Any]]:
        block = self._block(provider)
        self._delay(None)
        raw_models = block.get("models") or self._fallback.get("models") or []
        out = []
        for raw in raw_models:
            model_id = str(raw.get("id"))
            out.append(
                ModelInfo(
                    id=model_id,
                    name=str(raw.get("name") or model_id),
                    provider=provider,
                    owned_by=raw.get("owned_by"),
                    created=raw.get("created"),
                ).to_dict()
            )
        return out

    def chat_completion(
        self,
        provider: str,
        model: Optional[str],
        messages: Sequence[Any],
        options: Mapping[str, Any],
    ) -> Dict[str, Any]:
        block = self._block(provider)
        options = options or {}
        self._delay(options.get("mock_latency"))
        model = model or str(block.get("model") or self._catalog.get("default_model", "mock-model"))
        ctx = LogContext(provider=provider, model=model, request_type="chat_completion")
        normalized_log_event(self._logger, "mock.chat.start", ctx, phase="start")

        prompt = _extract_prompt(messages)
        text = self._select_text(block, prompt)
        prompt_tokens = sum(len(_content(m).split()) for m in messages)
        completion_tokens = len(text.split())
        response = {
            "id": f"mock-{provider}",
            "object": "chat.completion",
            "created": 0,
            "model": model,
            "choices": [
                {
                    "index": 0,
                    "message": {"role": "assistant", "content": text},
                    "finish_reason": "stop",
                }
            ],
            "usage": {
                "prompt_tokens": prompt_tokens,
                "completion_tokens": completion_tokens,
                "total_tokens": prompt_tokens + completion_tokens,
            },
        }
        normalized_log_event(self._logger, "mock.chat.end", ctx, phase="finalize", emitted=True)
        return response

    def close(self) -> None:
        return None

    # ------------------------------------------------------------------
    # Helper utilities

    def _block(self, provider: str) -> Mapping[str, Any]:
        if provider not in self._providers:
            raise ProviderError(code=ErrorCode.NOT_FOUND, message="provider not found", provider=provider)
        return self._blocks.get(provider, self._fallback)

    def _delay(self, override: Any) -> None:
        seconds = self._latency if override is None else float(override)
        if seconds > 0:
            self._sleep(seconds)

    def _select_text(self, block: Mapping[str, Any], prompt: str) -> str:
        responses: Mapping[str, Any] = block.get("responses", {})
        fallback: Mapping[str, Any] = self._fallback.get("responses", {})
        raw = (
            responses.get(prompt)
            or responses.get(prompt.lower())
            or fallback.get(prompt)
            or fallback.get(prompt.lower())
            or responses.get("*")
            or fallback.get("*")
            or {"text": ""}
        )
        return str(raw.get("text", ""))


# ---------------------------------------------------------------------------
# Module-level helpers


def _content(message: Any) -> str:
    if isinstance(message, Mapping):
        content = message.get("content", "")
    else:
        content = getattr(message, "content", "")
    if isinstance(content, list):
        content = " ".join(str(part.get("text", "")) for part in content if isinstance(part, Mapping))
    return str(content or "")


def _extract_prompt(messages: Sequence[Any]) -> str:
    """Return the last message content for fixture lookup, or ``"*"``."""

    if not messages:
        return "*"
    return _content(messages[-1]).strip() or "*"
