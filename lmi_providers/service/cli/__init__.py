"""lmi-providers setup CLI (package entrypoint).

Wires argument parsing (``cli_parser``) to action handlers (``cli_actions``);
no registry or bridge logic lives here.

Usage::

    lmi-providers list [--json]
    lmi-providers generate-config [FILE]
    lmi-providers add-to-config [--config PATH]
    lmi-providers serve [--workers N] [--mock]
    lmi-providers help
"""

from __future__ import annotations

import sys
from typing import Optional

from .cli_actions import run_command
from .cli_parser import COMMANDS, build_parser


def _find_command(argv: list[str]) -> Optional[str]:
    """Return the first positional token, skipping the global ``--catalog`` value."""
    skip = False
    for arg in argv:
        if skip:
            skip = False
            continue
        if arg == "--catalog":
            skip = True
            continue
        if not arg.startswith("-"):
            return arg
    return None


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entrypoint.

    Parameters
    ----------
    argv: Optional[list[str]]
        Argument vector; when ``None`` uses ``sys.argv[1:]``.

    Returns
    -------
    int
        Process exit code (0 success, 1 on unknown commands or configuration
        errors).
    """
    p = build_parser()
    argv_list = list(sys.argv[1:] if argv is None else argv)
    command = _find_command(argv_list)
    if not argv_list or command == "help" or (command is None and argv_list[0] in {"-h", "--help"}):
        p.print_help()
        return 0
    if command not in COMMANDS:
        print(f"Unknown command: {command}" if command else "Missing command", file=sys.stderr)
        p.print_help(sys.stderr)
        return 1
    args = p.parse_args(argv_list)
    return run_command(args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
