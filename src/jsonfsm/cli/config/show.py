"""
jsonfsm config show command.

SUMMARY: Print the states and transitions of a machine definition
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from jsonfsm.cli import OutputFormatter, add_config_arg, add_json_flag
from jsonfsm.core.config import ConfigManager
from jsonfsm.core.exceptions import ConfigValidationError
from jsonfsm.core.state import Catalog, Transition

SUMMARY = "Print the states and transitions of a machine definition"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_config_arg(parser)
    add_json_flag(parser)


def _format_transition(t: Transition) -> str:
    trigger = f"on {t.event}" if t.event else "auto"
    if t.branch:
        return f"{t.from_state} --{trigger}--> {t.to_success} | {t.to_failure} (branch)"
    return f"{t.from_state} --{trigger}--> {t.to_success}"


def render(catalog: Catalog) -> str:
    lines = [f"initialState: {catalog.initial_state}", "", "States:"]
    for s in catalog.states:
        flags = "waits" if s.wait_for_event else "auto"
        if s.send_response:
            flags += ", responds"
        arg = f"({s.action_arg!r})" if s.action_arg else ""
        lines.append(f"  {s.name}: {s.action}{arg} [{flags}]")
    lines.extend(["", "Transitions:"])
    lines.extend(f"  {_format_transition(t)}" for t in catalog.transitions)
    if catalog.events:
        lines.extend(["", f"Events: {', '.join(catalog.events)}"])
    return "\n".join(lines)


def main(args: argparse.Namespace) -> int:
    """Show a machine definition."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        catalog = ConfigManager().load_catalog(Path(args.config))
    except ConfigValidationError as e:
        formatter.error(e, error_code="config_error")
        return 1

    if formatter.json_mode:
        formatter.json_output(catalog.to_dict())
    else:
        formatter.text(render(catalog))
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
