"""
jsonfsm machine serve command.

SUMMARY: Run a machine and accept events over HTTP

Loads and validates the machine definition, initializes it (resolving any
automatic chain from the initial state) and starts the HTTP listener.
"""

from __future__ import annotations

import argparse
import sys
from typing import Any, Dict

from jsonfsm.cli import OutputFormatter, add_standard_flags, build_machine, load_settings, setup_logging
from jsonfsm.core.exceptions import JsonFsmError

SUMMARY = "Run a machine and accept events over HTTP"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_standard_flags(parser)
    parser.add_argument("--host", type=str, help="Interface to bind (default from settings)")
    parser.add_argument("--port", type=int, help="TCP port (default from settings)")


def _overrides(args: argparse.Namespace) -> Dict[str, Any]:
    server: Dict[str, Any] = {}
    if args.host:
        server["host"] = args.host
    if args.port is not None:
        server["port"] = args.port
    return {"server": server} if server else {}


def main(args: argparse.Namespace) -> int:
    """Serve the machine until interrupted."""
    formatter = OutputFormatter()

    try:
        settings = load_settings(args, _overrides(args))
        setup_logging(settings)
        machine = build_machine(args, settings)
        machine.init()
    except JsonFsmError as e:
        formatter.error(e, error_code="startup_error")
        return 1

    # Imported late: uvicorn is only needed when actually serving.
    from jsonfsm.ingress.server import serve

    serve(machine, settings)
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
