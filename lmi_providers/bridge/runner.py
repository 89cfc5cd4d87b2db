"""Bridge process entry point.

Runs :class:`BridgeServer` on the process's stdin/stdout::

    python -m lmi_providers.bridge [--workers N] [--mock] [--catalog PATH]
    lmi-bridge [...]

While serving, ``sys.stdout`` is pointed at stderr so stray prints from
third-party code cannot corrupt the wire stream; only the server writes to the
real stdout.
"""

from __future__ import annotations

import argparse
import contextlib
import io
import os
import sys
from typing import Optional, TextIO

from ..base.errors import ConfigurationError
from ..base.interfaces import ProviderInvoker
from ..base.logging import configure_logger, get_logger, log_event
from ..di import build_container
from .server import BridgeServer

_logger = get_logger("bridge")


def run_bridge(
    invoker: ProviderInvoker,
    *,
    workers: int = 1,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
    install_signals: bool = True,
) -> int:
    """Serve ``invoker`` until EOF, SIGINT/SIGTERM or a closed stdout.

    Returns the process exit code.
    """
    own_stdin = stdin is None
    wire_in = _wire_stdin() if own_stdin else stdin
    wire_out = stdout or sys.stdout
    server = BridgeServer(invoker, stdin=wire_in, stdout=wire_out, workers=workers)
    if install_signals:
        server.install_signal_handlers()
    redirect = contextlib.redirect_stdout(sys.stderr) if wire_out is sys.stdout else contextlib.nullcontext()
    try:
        with redirect:
            code = server.serve()
    finally:
        if own_stdin and wire_in is not sys.stdin:
            # Hand the byte stream back to sys.stdin instead of closing it.
            with contextlib.suppress(ValueError):
                wire_in.detach()  # type: ignore[union-attr]
    if code != 0 and wire_out is sys.__stdout__:
        _detach_stdout()
    return code


def _wire_stdin() -> TextIO:
    """Return stdin decoded as UTF-8, undecodable bytes replaced with U+FFFD.

    The interpreter may decode stdin strictly (for example under
    ``PYTHONIOENCODING=utf-8:strict``); a stray byte must turn into a parse
    error for its line, not end the read loop.
    """
    buffer = getattr(sys.stdin, "buffer", None)
    if buffer is None:
        return sys.stdin
    return io.TextIOWrapper(buffer, encoding="utf-8", errors="replace")


def _detach_stdout() -> None:
    # The reader is gone; point fd 1 at devnull so interpreter shutdown does
    # not report a second BrokenPipeError while flushing stdout.
    with contextlib.suppress(OSError, ValueError):
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.__stdout__.fileno())
        os.close(devnull)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="lmi-bridge",
        description="Serve provider requests as newline-delimited JSON on stdin/stdout",
    )
    p.add_argument("--workers", type=int, default=None, help="Dispatch workers (default: LMI_BRIDGE_WORKERS or 1)")
    p.add_argument("--mock", action="store_true", default=None, help="Use the deterministic mock invoker")
    p.add_argument("--catalog", default=None, help="External JSON/YAML provider catalog")
    p.add_argument("--log-file", default=None, help="Also write JSON logs to this file")
    p.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING or ERROR")
    return p


def serve_from_args(args: argparse.Namespace) -> int:
    """Build the container from parsed flags and run the bridge."""
    if args.log_level or args.log_file:
        configure_logger(level=args.log_level, file_path=args.log_file)
    container = build_container(
        {
            "use_mocks": args.mock,
            "catalog_path": args.catalog,
            "workers": args.workers if args.workers and args.workers > 0 else None,
        }
    )
    try:
        invoker = container.invoker()
    except ConfigurationError as exc:
        log_event(_logger, "bridge.config_error", error=str(exc))
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    settings = container.settings()
    log_event(
        _logger,
        "bridge.configured",
        providers=len(container.registry()),
        mock=settings.use_mocks,
        workers=settings.workers,
    )
    return run_bridge(invoker, workers=settings.workers)


def main(argv: Optional[list[str]] = None) -> int:
    """Bridge entrypoint; returns the process exit code."""
    args = build_parser().parse_args(argv)
    return serve_from_args(args)


__all__ = ["run_bridge", "serve_from_args", "build_parser", "main"]
