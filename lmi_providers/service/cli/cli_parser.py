"""CLI parser construction for lmi-providers.

This module wires subparsers but contains no execution logic. Subcommand
handlers live in ``cli_actions`` to keep files small and testable.
"""

from __future__ import annotations

import argparse

COMMANDS = ("list", "generate-config", "add-to-config", "serve", "help")

EPILOG = """\
examples:
  lmi-providers list
  lmi-providers generate-config lmi-providers.toml
  lmi-providers add-to-config

After adding providers to your config, select one with:
  icodex --model-provider lmi_openai
"""


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level CLI parser and subcommands.

    Returns
    -------
    argparse.ArgumentParser
        Configured parser with ``list``, ``generate-config``, ``add-to-config``
        and ``serve`` subcommands. No I/O happens here.
    """
    p = argparse.ArgumentParser(
        prog="lmi-providers",
        description="Large Models Interface providers: registry listing, host config setup and bridge server",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("--catalog", default=None, help="External JSON/YAML provider catalog")
    sub = p.add_subparsers(dest="cmd")

    # list
    p_list = sub.add_parser("list", help="List all available providers")
    p_list.add_argument("--json", action="store_true", help="Emit host-config records as JSON")

    # generate-config
    p_gen = sub.add_parser("generate-config", help="Generate TOML configuration for the providers")
    p_gen.add_argument("file", nargs="?", default=None, help="Write to FILE instead of stdout")

    # add-to-config
    p_add = sub.add_parser("add-to-config", help="Add the providers to an existing host config")
    p_add.add_argument("--config", default=None, help="Host config path (default: LMI_HOST_CONFIG or ~/.icodex/config.toml)")

    # serve
    p_serve = sub.add_parser("serve", help="Run the bridge server on stdin/stdout")
    p_serve.add_argument("--workers", type=int, default=None)
    p_serve.add_argument("--mock", action="store_true", default=None)
    p_serve.add_argument("--log-file", default=None)
    p_serve.add_argument("--log-level", default=None)

    sub.add_parser("help", help="Show this help message")
    return p
