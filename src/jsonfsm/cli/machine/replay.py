"""
jsonfsm machine replay command.

SUMMARY: Run a sequence of events against a machine offline

Each event is given as ``NAME`` or ``NAME=PARAM``. The machine is
initialized, then every event is sent in order; the states entered and any
response produced by the handlers are printed. Stops at the first error.
"""

from __future__ import annotations

import argparse
import sys
from typing import Any, Dict, List, Tuple

from jsonfsm.cli import (
    OutputFormatter,
    add_json_flag,
    add_standard_flags,
    build_machine,
    load_settings,
    setup_logging,
)
from jsonfsm.core.exceptions import ConfigValidationError, JsonFsmError
from jsonfsm.core.state import BufferedResponder, TransitionResult

SUMMARY = "Run a sequence of events against a machine offline"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_standard_flags(parser)
    parser.add_argument(
        "events",
        nargs="*",
        metavar="EVENT[=PARAM]",
        help="Events to send, in order",
    )
    add_json_flag(parser)


def parse_event(raw: str) -> Tuple[str, str]:
    """Split ``NAME=PARAM`` (PARAM may itself contain '=')."""
    name, sep, param = raw.partition("=")
    return name, param if sep else ""


def _step(result: TransitionResult, responder: BufferedResponder) -> Dict[str, Any]:
    step = result.to_dict()
    if responder.responded:
        step["response"] = {"status": responder.status, "payload": responder.payload}
    return step


def _describe(step: Dict[str, Any]) -> str:
    label = step["event"] or "init"
    line = f"{label}: {' -> '.join(step['path'])}"
    response = step.get("response")
    if response:
        line += f"  [{response['status']} {response['payload']!r}]"
    return line


def main(args: argparse.Namespace) -> int:
    """Replay events and report the resulting states."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        settings = load_settings(args)
        setup_logging(settings)
        machine = build_machine(args, settings)
    except ConfigValidationError as e:
        formatter.error(e, error_code="config_error")
        return 1

    steps: List[Dict[str, Any]] = []
    try:
        responder = BufferedResponder()
        steps.append(_step(machine.init(responder=responder), responder))
        formatter.text(_describe(steps[-1]))
        for raw in args.events:
            name, param = parse_event(raw)
            responder = BufferedResponder()
            steps.append(_step(machine.send_event(name, param, responder=responder), responder))
            formatter.text(_describe(steps[-1]))
    except JsonFsmError as e:
        if formatter.json_mode:
            formatter.json_output({"steps": steps, "state": machine.snapshot()["state"], "error": e.to_json_error()})
        else:
            formatter.error(e, error_code=e.__class__.__name__)
        return 1

    final = machine.snapshot()["state"]
    formatter.success({"steps": steps, "state": final}, f"Final state: {final}")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
