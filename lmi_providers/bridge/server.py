"""Bridge server: newline-delimited JSON dispatch over stdin/stdout.

Protocol
--------
Each input line is one request object discriminated by ``type``
(``chat_completion``, ``list_models``, ``list_providers``). For every line the
server writes exactly one response line, in request order::

    {"success": true, "data": ...}
    {"success": false, "error": "...", "stack": "..."}

``stack`` accompanies input errors (malformed JSON, unknown type, invalid
fields) and server-level failures. Failures raised by the invoker carry only
``error``. No failure stops the loop.

Ordering
--------
With ``workers == 1`` (default) each request is fully processed before the
next line is read. With ``workers > 1`` requests run on a thread pool and a
single writer thread emits the responses strictly in arrival order.

Lifecycle
---------
The loop ends on EOF (exit code 0), on SIGINT/SIGTERM (exit code 0, in-flight
requests unanswered) or when stdout is closed (exit code 1). Cleanup (invoker
close, pooled HTTP clients closed, output flushed) runs on every path.
stdout carries nothing but response lines; logging goes to stderr.
"""

from __future__ import annotations

import contextlib
import logging
import queue
import signal
import threading
import traceback
from concurrent.futures import CancelledError, Future, ThreadPoolExecutor
from typing import Any, Optional, TextIO

from ..base.dto import (
    BridgeRequest,
    ListModelsRequest,
    ListProvidersRequest,
    RequestParseError,
    parse_request,
)
from ..base.errors import ProviderError
from ..base.http import close_all_clients
from ..base.interfaces import ProviderInvoker
from ..base.logging import LogContext, get_logger, log_event
from ..base.models import BridgeResponse
from ..config.defaults import BRIDGE_DEFAULT_WORKERS
from ..registry import strip_namespace


class BridgeTerminated(BaseException):
    """Raised from the signal handler to unwind the read loop.

    Derives from ``BaseException`` so per-request ``except Exception`` handlers
    never turn a termination into a failure response.
    """

    def __init__(self, signum: int) -> None:
        super().__init__(signum)
        self.signum = signum


class BridgeServer:
    """Serve bridge requests from ``stdin`` to ``invoker``, replying on ``stdout``."""

    def __init__(
        self,
        invoker: ProviderInvoker,
        *,
        stdin: TextIO,
        stdout: TextIO,
        workers: int = BRIDGE_DEFAULT_WORKERS,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._invoker = invoker
        self._stdin = stdin
        self._stdout = stdout
        self._workers = max(int(workers), 1)
        self._logger = logger or get_logger("bridge")
        self._write_lock = threading.Lock()
        self._broken = threading.Event()
        self._terminating = False
        self._closed = False

    @property
    def workers(self) -> int:
        return self._workers

    # ----- Request handling -----
    def dispatch(self, request: BridgeRequest) -> Any:
        """Route a validated request to the invoker; invoker errors propagate."""
        if isinstance(request, ListProvidersRequest):
            return self._invoker.list_providers()
        if isinstance(request, ListModelsRequest):
            return self._invoker.list_models(strip_namespace(request.provider))
        return self._invoker.chat_completion(
            strip_namespace(request.provider),
            request.model,
            request.messages,
            request.invocation_options(),
        )

    def handle_line(self, line: str, seq: int = 0) -> BridgeResponse:
        """Turn one input line into its response. Never raises ``Exception``."""
        ctx = LogContext(request_seq=seq)
        try:
            try:
                request = parse_request(line)
            except RequestParseError as exc:
                log_event(self._logger, "bridge.input_error", ctx, level=logging.WARNING, error=exc.message)
                return BridgeResponse.fail(exc.message, exc.detail)

            ctx.request_type = request.type
            ctx.provider = getattr(request, "provider", None)
            ctx.model = getattr(request, "model", None)
            log_event(self._logger, "bridge.request", ctx, level=logging.DEBUG)
            try:
                data = self.dispatch(request)
            except ProviderError as exc:
                return self._provider_failure(ctx, exc.message, exc.code.value)
            except Exception as exc:  # noqa: BLE001 - any invoker failure becomes a failure response
                return self._provider_failure(ctx, str(exc) or type(exc).__name__, None)
            log_event(self._logger, "bridge.response", ctx, level=logging.DEBUG, success=True)
            return BridgeResponse.ok(data)
        except Exception as exc:  # noqa: BLE001 - the loop must survive its own bugs
            return self._server_failure(ctx, exc)

    def process(self, line: str, seq: int = 0) -> str:
        """Handle ``line`` and return the serialized response line."""
        response = self.handle_line(line, seq)
        try:
            return response.to_line()
        except Exception as exc:  # noqa: BLE001 - unserializable payload
            return self._server_failure(LogContext(request_seq=seq), exc).to_line()

    def _provider_failure(self, ctx: LogContext, message: str, code: Optional[str]) -> BridgeResponse:
        log_event(self._logger, "bridge.response", ctx, level=logging.INFO, success=False, error=message, error_code=code)
        return BridgeResponse.fail(message)

    def _server_failure(self, ctx: LogContext, exc: Exception) -> BridgeResponse:
        stack = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        log_event(self._logger, "bridge.server_error", ctx, level=logging.ERROR, error=str(exc))
        return BridgeResponse.fail(f"internal bridge error: {exc}", stack)

    # ----- I/O -----
    def _read_line(self) -> Optional[str]:
        try:
            raw = self._stdin.readline()
        except UnicodeDecodeError as exc:
            # Strictly decoded input: answer the undecodable line as a parse error.
            log_event(self._logger, "bridge.decode_error", level=logging.WARNING, error=str(exc))
            return ""
        if not raw:
            return None
        return raw.rstrip("\r\n")

    def _write(self, text: str) -> None:
        with self._write_lock:
            try:
                self._stdout.write(text)
                self._stdout.flush()
            except ValueError as exc:
                # Write to a closed file object.
                raise BrokenPipeError(str(exc)) from exc

    # ----- Loops -----
    def serve(self) -> int:
        """Run until EOF, termination or a closed output stream.

        Returns the process exit code (0 for EOF and signals, 1 for a closed
        output stream).
        """
        log_event(self._logger, "bridge.start", workers=self._workers)
        exit_code = 0
        reason = "eof"
        try:
            if self._workers > 1:
                self._serve_concurrent()
            else:
                self._serve_serial()
        except BrokenPipeError:
            exit_code, reason = 1, "output_closed"
        except BridgeTerminated as exc:
            reason = f"signal:{exc.signum}"
        finally:
            self.close()
            log_event(self._logger, "bridge.stop", reason=reason, exit_code=exit_code)
        return exit_code

    def _serve_serial(self) -> None:
        seq = 0
        while True:
            line = self._read_line()
            if line is None:
                return
            seq += 1
            self._write(self.process(line, seq))

    def _serve_concurrent(self) -> None:
        pending: "queue.Queue[Optional[Future[str]]]" = queue.Queue()
        writer = threading.Thread(target=self._drain, args=(pending,), name="lmi-bridge-writer", daemon=True)
        pool = ThreadPoolExecutor(max_workers=self._workers, thread_name_prefix="lmi-bridge")
        writer.start()
        finished = False
        try:
            seq = 0
            while not self._broken.is_set():
                line = self._read_line()
                if line is None:
                    break
                seq += 1
                pending.put(pool.submit(self.process, line, seq))
            finished = True
        finally:
            pending.put(None)
            if finished:
                pool.shutdown(wait=True)
                writer.join()
            else:
                pool.shutdown(wait=False, cancel_futures=True)
        if self._broken.is_set():
            raise BrokenPipeError("bridge output stream closed")

    def _drain(self, pending: "queue.Queue[Optional[Future[str]]]") -> None:
        while True:
            fut = pending.get()
            if fut is None:
                return
            try:
                text = fut.result()
            except CancelledError:
                return
            try:
                self._write(text)
            except BrokenPipeError:
                self._broken.set()
                return

    # ----- Termination -----
    def handle_signal(self, signum: int, frame: Any = None) -> None:
        """Signal handler: unwind the loop once; repeated signals are ignored."""
        if self._terminating:
            return
        self._terminating = True
        raise BridgeTerminated(signum)

    def install_signal_handlers(self) -> None:
        """Route SIGINT/SIGTERM to :meth:`handle_signal` (main thread only)."""
        if threading.current_thread() is not threading.main_thread():
            return
        for sig in (signal.SIGINT, signal.SIGTERM):
            signal.signal(sig, self.handle_signal)

    def close(self) -> None:
        """Release the invoker and pooled HTTP clients, then flush output."""
        if self._closed:
            return
        self._closed = True
        self._terminating = True
        close = getattr(self._invoker, "close", None)
        try:
            if callable(close):
                close()
        except Exception as exc:  # noqa: BLE001 - cleanup continues past a failing invoker
            log_event(self._logger, "bridge.close_error", level=logging.WARNING, error=str(exc))
        finally:
            close_all_clients()
            with contextlib.suppress(OSError, ValueError):
                self._stdout.flush()


__all__ = ["BridgeServer", "BridgeTerminated"]
