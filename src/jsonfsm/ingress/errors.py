"""Mapping of engine errors to HTTP status codes."""
from __future__ import annotations

from typing import Any, Dict

from jsonfsm.core.exceptions import (
    ActionInvocationError,
    JsonFsmError,
    StateNotFoundError,
    TransitionNotFoundError,
)

# Caller mistakes: the event does not fit the machine's current state.
CLIENT_ERRORS = (TransitionNotFoundError, StateNotFoundError)


def status_for(error: JsonFsmError) -> int:
    """400 for caller mistakes, 500 for every server-side failure."""
    if isinstance(error, CLIENT_ERRORS):
        return 400
    return 500


def error_payload(error: JsonFsmError) -> Dict[str, Any]:
    """Structured error body. Never includes tracebacks or handler internals."""
    if isinstance(error, ActionInvocationError):
        message = f"Action '{error.action}' failed in state '{error.state}'"
    else:
        message = str(error)
    return {"error": message, "code": error.__class__.__name__}


__all__ = ["CLIENT_ERRORS", "status_for", "error_payload"]
