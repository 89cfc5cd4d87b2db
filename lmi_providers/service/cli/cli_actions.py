"""CLI action handlers.

Purpose
-------
Subcommand handlers for ``lmi-providers``, keeping the entrypoint thin. This
module has no top-level side effects and is safe to import in tests.

Output & Error Semantics
------------------------
- Results go to stdout; diagnostics go to stderr as JSON objects
  (``{"error": ..., "path": ...}``).
- Configuration failures (bad catalog, missing or unwritable host config)
  return exit code ``1``; successful runs and "already present" return ``0``.
"""

from __future__ import annotations

import argparse
import logging
import json
import sys
from typing import Any, Dict, Optional

from ...base.errors import ConfigurationError
from ...base.logging import get_logger, log_event
from ...config import host_config_path
from ...registry import ProviderRegistry
from ..config_emitter import add_to_config, render, write_config

_logger = get_logger("cli")


def _error(message: str, **extra: Any) -> int:
    payload: Dict[str, Any] = {"error": message}
    payload.update({k: v for k, v in extra.items() if v is not None})
    print(json.dumps(payload), file=sys.stderr)
    return 1


def load_registry(args: argparse.Namespace) -> ProviderRegistry:
    """Load the registry from ``--catalog`` (or settings / bundled catalog)."""
    return ProviderRegistry.load(getattr(args, "catalog", None))


def handle_list(args: argparse.Namespace, registry: ProviderRegistry) -> int:
    """Print every provider, human-readable or as JSON host records."""
    if args.json:
        print(json.dumps({cfg.id: cfg.to_host_dict() for cfg in registry}, indent=2))
        return 0
    print("Available Large Models Interface Providers:\n")
    for cfg in registry:
        print(f"{cfg.id}:")
        print(f"  Name: {cfg.display_name}")
        print(f"  Base URL: {cfg.base_url or 'N/A'}")
        print(f"  API Key Env: {cfg.credential_env_var or 'N/A'}")
        print(f"  Key Instructions: {cfg.credential_hint}")
        print(f"  Wire API: {cfg.wire_protocol}")
        print(f"  Requires Host Auth: {'true' if cfg.requires_host_auth else 'false'}")
        print("")
    return 0


def handle_generate_config(args: argparse.Namespace, registry: ProviderRegistry) -> int:
    """Print the rendered provider blocks, or write them to ``args.file``."""
    if not args.file:
        sys.stdout.write(render(registry))
        return 0
    target = write_config(args.file, registry)
    print(f"Configuration written to: {target}")
    return 0


def handle_add_to_config(args: argparse.Namespace, registry: ProviderRegistry) -> int:
    """Merge the provider blocks into the host configuration file."""
    path = host_config_path(args.config)
    if not path.is_file():
        return _error(f"Could not find host config file. Please create {path} first.", path=str(path))
    result = add_to_config(path, registry)
    if not result.changed:
        print("LMI providers are already configured in your config file.")
        return 0
    print(f"Added LMI providers to: {path}")
    print("Select one with the model_provider setting or the --model-provider flag.")
    if len(registry):
        print(f"Example: icodex --model-provider {next(iter(registry)).id}")
    return 0


def handle_serve(args: argparse.Namespace) -> int:
    """Run the bridge server with the ``serve`` flags."""
    from ...bridge.runner import serve_from_args

    return serve_from_args(args)


def run_command(args: argparse.Namespace) -> int:
    """Dispatch a parsed command; configuration errors become exit code 1."""
    if args.cmd == "serve":
        return handle_serve(args)
    handlers = {
        "list": handle_list,
        "generate-config": handle_generate_config,
        "add-to-config": handle_add_to_config,
    }
    try:
        registry = load_registry(args)
        rc = handlers[args.cmd](args, registry)
    except ConfigurationError as exc:
        log_event(_logger, "cli.config_error", level=logging.DEBUG, command=args.cmd, error=exc.message, source=exc.source)
        return _error(exc.message, path=exc.source)
    return rc


__all__ = [
    "handle_list",
    "handle_generate_config",
    "handle_add_to_config",
    "handle_serve",
    "load_registry",
    "run_command",
]
