from __future__ import annotations

from typing import Any, Dict, Mapping


class JsonFsmError(Exception):
    """Base exception for jsonfsm."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class ConfigValidationError(JsonFsmError, ValueError):
    """Raised when a machine configuration violates the catalog invariants.

    ``errors`` holds every problem found, not just the first one.
    """

    def __init__(
        self,
        message: str = "",
        *,
        errors: list[str] | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        self.errors = list(errors or [])
        if self.errors:
            ctx["errors"] = list(self.errors)
        JsonFsmError.__init__(self, message, context=ctx)
        ValueError.__init__(self, message)


class StateNotFoundError(JsonFsmError, LookupError):
    """Raised when a state name is not in the catalog."""

    def __init__(self, name: str, *, context: Mapping[str, Any] | None = None) -> None:
        ctx = dict(context or {})
        ctx["state"] = name
        self.state = name
        JsonFsmError.__init__(self, f"State '{name}' not found in states list", context=ctx)
        LookupError.__init__(self, str(self))


class TransitionNotFoundError(JsonFsmError, LookupError):
    """Raised when no transition matches the current state and event."""

    def __init__(
        self,
        state: str,
        event: str,
        *,
        allowed: list[str] | None = None,
    ) -> None:
        self.state = state
        self.event = event
        if event:
            message = (
                f"No transition supports the current state ({state!r}) "
                f"and the sent event ({event!r})"
            )
        else:
            message = f"No transition supports the current state - {state!r}"
        ctx: Dict[str, Any] = {"state": state, "event": event}
        if allowed:
            ctx["allowed_events"] = list(allowed)
            message += f". Allowed events: {', '.join(allowed)}"
        JsonFsmError.__init__(self, message, context=ctx)
        LookupError.__init__(self, message)


class HandlerNotRegisteredError(JsonFsmError, LookupError):
    """Raised when a state's action has no registered handler."""

    def __init__(self, action: str, *, state: str | None = None) -> None:
        self.action = action
        ctx: Dict[str, Any] = {"action": action}
        if state is not None:
            ctx["state"] = state
        message = f"No handler registered for action '{action}'"
        JsonFsmError.__init__(self, message, context=ctx)
        LookupError.__init__(self, message)


class ActionInvocationError(JsonFsmError, RuntimeError):
    """Raised when a handler itself fails (raises) during a transition."""

    def __init__(self, action: str, *, state: str, cause: BaseException) -> None:
        self.action = action
        self.state = state
        message = f"Action '{action}' failed in state '{state}': {cause}"
        JsonFsmError.__init__(
            self,
            message,
            context={"action": action, "state": state, "cause": type(cause).__name__},
        )
        RuntimeError.__init__(self, message)


class TransitionCycleDetectedError(JsonFsmError, RuntimeError):
    """Raised when an automatic chain revisits a state without ever waiting."""

    def __init__(self, path: list[str]) -> None:
        self.path = list(path)
        message = (
            "Automatic transitions form a cycle that never reaches a waiting state: "
            + " -> ".join(self.path)
        )
        JsonFsmError.__init__(self, message, context={"path": list(self.path)})
        RuntimeError.__init__(self, message)


class ReentrantTransitionError(JsonFsmError, RuntimeError):
    """Raised when a handler calls back into the machine it is running in."""

    def __init__(self, operation: str, *, state: str | None = None) -> None:
        message = f"Cannot {operation} while a transition is in progress"
        if state:
            message += f" (current state '{state}')"
        JsonFsmError.__init__(self, message, context={"operation": operation, "state": state})
        RuntimeError.__init__(self, message)


class MachineNotInitializedError(JsonFsmError, RuntimeError):
    """Raised when events are sent before ``init()``."""

    def __init__(self, message: str = "State machine has not been initialized") -> None:
        JsonFsmError.__init__(self, message)
        RuntimeError.__init__(self, message)


__all__ = [
    "JsonFsmError",
    "ConfigValidationError",
    "StateNotFoundError",
    "TransitionNotFoundError",
    "HandlerNotRegisteredError",
    "ActionInvocationError",
    "TransitionCycleDetectedError",
    "ReentrantTransitionError",
    "MachineNotInitializedError",
]
