"""Shared helpers for the lmi_providers test suite."""

from __future__ import annotations

import io
import json
import threading
import time
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from lmi_providers.bridge.server import BridgeServer


class FakeInvoker:
    """Scriptable invoker recording every call.

    ``chat_completion`` sleeps for ``options["delay"]`` seconds and echoes the
    last message content, so ordering tests can vary latency per request.
    """

    def __init__(
        self,
        providers: Sequence[str] = ("openai", "anthropic"),
        *,
        errors: Optional[Mapping[str, Exception]] = None,
    ) -> None:
        self.providers = list(providers)
        self.errors = dict(errors or {})
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []
        self.closed = False
        self._lock = threading.Lock()

    def _record(self, name: str, *args: Any) -> None:
        with self._lock:
            self.calls.append((name, args))

    def list_providers(self) -> List[str]:
        self._record("list_providers")
        return list(self.providers)

    def list_models(self, provider: str) -> List[Dict[str, Any]]:
        self._record("list_models", provider)
        if provider not in self.providers:
            raise RuntimeError("provider not found")
        return [{"id": f"{provider}-model"}]

    def chat_completion(self, provider, model, messages, options) -> Dict[str, Any]:
        self._record("chat_completion", provider, model, list(messages), dict(options))
        delay = float(options.get("delay", 0))
        if delay:
            time.sleep(delay)
        if provider in self.errors:
            raise self.errors[provider]
        if provider not in self.providers:
            raise RuntimeError("provider not found")
        echo = messages[-1]["content"] if messages else None
        return {"provider": provider, "model": model, "echo": echo}

    def close(self) -> None:
        self.closed = True


def serve_lines(invoker: Any, lines: Iterable[str], workers: int = 1) -> Tuple[int, List[Dict[str, Any]]]:
    """Run a bridge server over ``lines`` in-process; return (exit code, responses)."""

    stdin = io.StringIO("".join(f"{line}\n" for line in lines))
    stdout = io.StringIO()
    server = BridgeServer(invoker, stdin=stdin, stdout=stdout, workers=workers)
    code = server.serve()
    return code, [json.loads(x) for x in stdout.getvalue().splitlines()]
