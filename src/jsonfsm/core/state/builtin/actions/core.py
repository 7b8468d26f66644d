"""Core action handlers shipped with jsonfsm.

These cover the alarm-panel style machines: log a message, check a code
against the machine's ``expectedCode`` setting, and answer the event
submitter.
"""
from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)


def log(arg: str, ctx: Any) -> bool:
    """Log the argument; acknowledge the event when the state asks for it."""
    if ctx is not None and ctx.state.send_response:
        ctx.respond(200, "")
    logger.info("%s", arg)
    return True


def validate_code(code: str, ctx: Any) -> bool:
    """Return True when ``code`` matches the configured ``expectedCode``."""
    expected = str(ctx.settings.get("expectedCode", "")) if ctx is not None else ""
    return code == expected


def send_response(response: str, ctx: Any) -> bool:
    """Answer the submitter with the outcome named by ``response``."""
    if ctx is None:
        return True
    if response == "OK":
        ctx.respond(200, "CODE OK")
    else:
        ctx.respond_error(406, "WRONG CODE")
    return True


ACTIONS = {
    "Log": log,
    "ValidateCode": validate_code,
    "SendResponse": send_response,
}
