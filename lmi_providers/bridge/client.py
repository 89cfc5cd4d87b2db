"""Host-side client for the bridge server subprocess.

Starts ``python -m lmi_providers.bridge`` (or a given command) with piped
stdin/stdout, writes one request line and reads one response line per call.
A lock serializes request/response pairs because the protocol carries no
request ids: the n-th response answers the n-th request.

Failure responses raise :class:`ProviderError` with a code classified from the
message. A bridge that exits (or closes stdout) before answering raises
``ProviderError(UNAVAILABLE, "bridge exited without a response")``.
"""

from __future__ import annotations

import contextlib
import json
import os
import subprocess
import sys
import threading
from typing import IO, Any, Dict, List, Mapping, Optional, Sequence, Union

from ..base.errors import ErrorCode, ProviderError, classify_message
from ..base.logging import get_logger, log_event
from ..config.defaults import BRIDGE_MODULE

_EXITED = "bridge exited without a response"


class BridgeClient:
    """Talk to a bridge server subprocess over newline-delimited JSON."""

    def __init__(
        self,
        command: Optional[Sequence[str]] = None,
        *,
        env: Optional[Mapping[str, str]] = None,
        stderr: Union[int, IO[Any], None] = None,
        shutdown_timeout: float = 5.0,
    ) -> None:
        """
        Args:
            command: argv of the bridge process; defaults to running
                ``lmi_providers.bridge`` with the current interpreter.
            env: Extra environment variables layered over ``os.environ``.
            stderr: Where the bridge's logs go (inherited by default).
            shutdown_timeout: Seconds :meth:`close` waits after closing stdin.
        """
        self._command: List[str] = list(command) if command else [sys.executable, "-m", BRIDGE_MODULE]
        self._env = {**os.environ, **dict(env)} if env else None
        self._stderr = stderr
        self._shutdown_timeout = shutdown_timeout
        self._proc: Optional[subprocess.Popen] = None
        self._lock = threading.Lock()
        self._logger = get_logger("bridge.client")

    # ----- Lifecycle -----
    def start(self) -> "BridgeClient":
        with self._lock:
            self._ensure_started()
        return self

    def _ensure_started(self) -> subprocess.Popen:
        if self._proc is None or self._proc.poll() is not None:
            self._proc = subprocess.Popen(  # nosec B603 - argv list, no shell
                self._command,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=self._stderr,
                env=self._env,
                text=True,
                encoding="utf-8",
                bufsize=1,
            )
            log_event(self._logger, "bridge.client.spawn", pid=self._proc.pid)
        return self._proc

    @property
    def pid(self) -> Optional[int]:
        return self._proc.pid if self._proc else None

    def close(self) -> Optional[int]:
        """Close stdin (EOF stops the bridge) and reap the process.

        Returns the bridge's exit code, or ``None`` when it was never started.
        """
        with self._lock:
            proc, self._proc = self._proc, None
        if proc is None:
            return None
        with contextlib.suppress(OSError, ValueError):
            if proc.stdin:
                proc.stdin.close()
        try:
            code = proc.wait(timeout=self._shutdown_timeout)
        except subprocess.TimeoutExpired:
            proc.terminate()
            try:
                code = proc.wait(timeout=self._shutdown_timeout)
            except subprocess.TimeoutExpired:
                proc.kill()
                code = proc.wait()
        if proc.stdout:
            proc.stdout.close()
        log_event(self._logger, "bridge.client.exit", exit_code=code)
        return code

    def __enter__(self) -> "BridgeClient":
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ----- Protocol -----
    def send(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        """Write one request and return the decoded response object as is."""
        line = json.dumps(dict(payload)) + "\n"
        provider = str(payload.get("provider") or "bridge")
        model = payload.get("model")
        with self._lock:
            proc = self._ensure_started()
            try:
                proc.stdin.write(line)  # type: ignore[union-attr]
                proc.stdin.flush()  # type: ignore[union-attr]
                raw = proc.stdout.readline()  # type: ignore[union-attr]
            except (BrokenPipeError, OSError, ValueError) as exc:
                raise ProviderError(
                    code=ErrorCode.UNAVAILABLE, message=_EXITED, provider=provider, model=model, raw=exc
                ) from exc
        if not raw:
            raise ProviderError(code=ErrorCode.UNAVAILABLE, message=_EXITED, provider=provider, model=model)
        try:
            response = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ProviderError(
                code=ErrorCode.INTERNAL,
                message=f"malformed bridge response: {raw.strip()[:200]}",
                provider=provider,
                model=model,
                raw=exc,
            ) from exc
        if not isinstance(response, dict):
            raise ProviderError(
                code=ErrorCode.INTERNAL, message="malformed bridge response", provider=provider, model=model
            )
        return response

    def request(self, payload: Mapping[str, Any]) -> Any:
        """Send ``payload`` and return the response ``data``.

        Raises:
            ProviderError: for failure responses (code classified from the
                message) and when the bridge exits without answering.
        """
        response = self.send(payload)
        if response.get("success"):
            return response.get("data")
        message = str(response.get("error") or "unknown bridge error")
        raise ProviderError(
            code=classify_message(message),
            message=message,
            provider=str(payload.get("provider") or "bridge"),
            model=payload.get("model"),
        )

    def chat_completion(
        self,
        provider: str,
        model: Optional[str],
        messages: Sequence[Any],
        options: Optional[Mapping[str, Any]] = None,
        tools: Optional[Sequence[Any]] = None,
    ) -> Any:
        payload: Dict[str, Any] = {
            "type": "chat_completion",
            "provider": provider,
            "model": model,
            "messages": list(messages),
            "options": dict(options or {}),
        }
        if tools is not None:
            payload["tools"] = list(tools)
        return self.request(payload)

    def list_models(self, provider: str) -> List[Dict[str, Any]]:
        return self.request({"type": "list_models", "provider": provider})

    def list_providers(self) -> List[str]:
        return self.request({"type": "list_providers"})


__all__ = ["BridgeClient"]
