"""Common CLI argument registration utilities.

This module provides reusable argument registration functions to reduce
duplication across CLI commands.
"""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """Add --json flag for JSON output mode."""
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_config_arg(parser: argparse.ArgumentParser) -> None:
    """Add the positional machine definition argument."""
    parser.add_argument(
        "config",
        metavar="CONFIG",
        help="Machine definition file (YAML or JSON)",
    )


def add_settings_flag(parser: argparse.ArgumentParser) -> None:
    """Add --settings flag for a runtime settings file."""
    parser.add_argument(
        "--settings",
        type=str,
        help="Runtime settings file (YAML) layered over the bundled defaults",
    )


def add_handlers_flag(parser: argparse.ArgumentParser) -> None:
    """Add --handlers flag (repeatable) for extra action handler directories."""
    parser.add_argument(
        "--handlers",
        action="append",
        default=[],
        metavar="DIR",
        help="Directory of Python modules providing action handlers (repeatable)",
    )


def add_verbose_flag(parser: argparse.ArgumentParser) -> None:
    """Add --verbose flag (debug logging)."""
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )


def add_standard_flags(parser: argparse.ArgumentParser) -> None:
    """Flags shared by every command that loads a machine."""
    add_config_arg(parser)
    add_settings_flag(parser)
    add_handlers_flag(parser)
    add_verbose_flag(parser)


__all__ = [
    "add_json_flag",
    "add_config_arg",
    "add_settings_flag",
    "add_handlers_flag",
    "add_verbose_flag",
    "add_standard_flags",
]
