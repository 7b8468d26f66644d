"""Per-invocation context handed to action handlers.

Handlers never see the transport. Anything that needs to answer the event
submitter goes through ``ActionContext.respond`` which forwards to the
``Responder`` supplied by the caller of the engine (the HTTP adapter, the
CLI replay command, a test).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, List, Mapping, Optional, Protocol, Tuple

from .models import State


class Responder(Protocol):
    """Sink for transport-level responses produced by handlers."""

    def respond(self, status: int, payload: Any) -> None:
        ...


class BufferedResponder:
    """Responder that records responses for the caller to inspect.

    The first response is the one reported by ``status``/``payload``; later
    ones are kept in ``history``.
    """

    def __init__(self) -> None:
        self.history: List[Tuple[int, Any]] = []

    def respond(self, status: int, payload: Any) -> None:
        self.history.append((int(status), payload))

    @property
    def responded(self) -> bool:
        return bool(self.history)

    @property
    def status(self) -> Optional[int]:
        return self.history[0][0] if self.history else None

    @property
    def payload(self) -> Any:
        return self.history[0][1] if self.history else None


@dataclass(frozen=True)
class ActionContext:
    """What a handler may know about the invocation."""

    state: State
    event: str = ""
    settings: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    responder: Optional[Responder] = None

    @property
    def automatic(self) -> bool:
        """True when the action runs as part of an automatic chain."""
        return not self.event

    def respond(self, status: int, payload: Any) -> None:
        if self.responder is not None:
            self.responder.respond(status, payload)

    def respond_error(self, status: int, message: str) -> None:
        self.respond(status, {"error": message})


__all__ = ["Responder", "BufferedResponder", "ActionContext"]
