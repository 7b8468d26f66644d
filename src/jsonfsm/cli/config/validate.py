"""
jsonfsm config validate command.

SUMMARY: Validate a machine definition

Checks the definition against the schema and the catalog invariants, and
reports warnings such as ambiguous transitions or unreachable states.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List

from jsonfsm.cli import OutputFormatter, add_config_arg, add_json_flag
from jsonfsm.core.config import ConfigManager
from jsonfsm.core.exceptions import ConfigValidationError

SUMMARY = "Validate a machine definition"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_config_arg(parser)
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Enable strict validation (treat warnings as errors)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only output errors, no success messages",
    )
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    """Validate a machine definition."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    path = Path(args.config)

    errors: List[str] = []
    warnings: List[str] = []
    try:
        catalog = ConfigManager().load_catalog(path)
        warnings = list(catalog.warnings)
    except ConfigValidationError as e:
        errors = list(e.errors) or [str(e)]

    failed = bool(errors) or (bool(warnings) and args.strict)

    if formatter.json_mode:
        formatter.json_output(
            {"config": str(path), "valid": not failed, "errors": errors, "warnings": warnings}
        )
        return 1 if failed else 0

    if warnings:
        formatter.text(f"Warnings ({len(warnings)}):")
        for msg in warnings:
            formatter.text(f"   - {msg}")

    if errors:
        formatter.text(f"Errors ({len(errors)}):")
        for msg in errors:
            formatter.text(f"   - {msg}")
        formatter.text(f"{path}: invalid")
        return 1

    if failed:
        formatter.text(f"{path}: has warnings (strict mode)")
        return 1

    if not args.quiet:
        formatter.text(f"{path}: valid" + (" (with warnings)" if warnings else ""))
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
