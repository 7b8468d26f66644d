"""
Command dispatcher for the ``jsonfsm`` CLI.

Commands are plain modules laid out as ``cli/<domain>/<command>.py``. Each
one exposes ``SUMMARY``, ``register_args(parser)`` and ``main(args) -> int``;
dropping a new module into a domain folder is enough to add a command.
"""

from __future__ import annotations

import argparse
import importlib
import sys
from functools import lru_cache
from pathlib import Path
from types import ModuleType

CLI_DIR = Path(__file__).parent


def _is_command_file(path: Path) -> bool:
    return path.suffix == ".py" and not path.name.startswith("_")


@lru_cache(maxsize=1)
def discover_domains() -> tuple[str, ...]:
    """Names of the sub-packages that contain at least one command."""
    return tuple(
        sorted(
            d.name
            for d in CLI_DIR.iterdir()
            if d.is_dir() and not d.name.startswith("_") and any(_is_command_file(f) for f in d.iterdir())
        )
    )


@lru_cache(maxsize=16)
def discover_commands(domain: str) -> dict[str, ModuleType]:
    """Command modules of ``domain`` keyed by command name."""
    commands: dict[str, ModuleType] = {}
    for path in sorted((CLI_DIR / domain).glob("*.py")):
        if not _is_command_file(path):
            continue
        try:
            commands[path.stem] = importlib.import_module(f"jsonfsm.cli.{domain}.{path.stem}")
        except ImportError as e:
            print(f"Warning: skipping command {domain} {path.stem}: {e}", file=sys.stderr)
    return commands


def build_parser() -> argparse.ArgumentParser:
    """Parser with one sub-parser per domain and one per command below it."""
    from jsonfsm import __version__

    parser = argparse.ArgumentParser(
        prog="jsonfsm",
        description="jsonfsm - declarative finite state machines driven by events",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    domains = parser.add_subparsers(dest="domain", title="domains", metavar="<domain>")

    for domain in discover_domains():
        commands = discover_commands(domain)
        domain_parser = domains.add_parser(domain, help=f"{domain.title()} commands")
        domain_parser.set_defaults(_help=domain_parser.print_help)
        sub = domain_parser.add_subparsers(dest="command", title="commands", metavar="<command>")
        for name, module in commands.items():
            cmd_parser = sub.add_parser(
                name.replace("_", "-"),
                help=getattr(module, "SUMMARY", f"{domain} {name}"),
            )
            register = getattr(module, "register_args", None)
            if register is not None:
                register(cmd_parser)
            cmd_parser.set_defaults(_func=module.main)

    return parser


DEFAULT_COMMAND = ("machine", "serve")


def main(argv: list[str] | None = None) -> int:
    """Entry point of the ``jsonfsm`` console script; returns the exit code.

    ``jsonfsm CONFIG [options]`` is shorthand for ``jsonfsm machine serve CONFIG``.
    A missing domain or command is a usage error (exit status 2).
    """
    argv = list(sys.argv[1:] if argv is None else argv)
    if argv and not argv[0].startswith("-") and argv[0] not in discover_domains():
        argv = [*DEFAULT_COMMAND, *argv]

    parser = build_parser()
    args = parser.parse_args(argv)
    func = getattr(args, "_func", None)
    if func is None:
        if args.domain is None:
            parser.print_usage(sys.stderr)
            print("jsonfsm: error: a CONFIG file or a domain is required", file=sys.stderr)
        else:
            args._help(sys.stderr)
            print(f"jsonfsm {args.domain}: error: a command is required", file=sys.stderr)
        return 2
    return int(func(args) or 0)


if __name__ == "__main__":
    sys.exit(main())
