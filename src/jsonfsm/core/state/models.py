"""State machine data model.

Plain frozen dataclasses built from the parsed configuration mapping. The
configuration uses the camelCase keys of the wire format (``waitForEvent``,
``toSuccess``...); attributes use snake_case.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping


def _as_str(value: Any) -> str:
    return "" if value is None else str(value)


@dataclass(frozen=True)
class State:
    """A named node: the action to run and whether it waits for an event."""

    name: str
    action: str
    action_arg: str = ""
    wait_for_event: bool = False
    send_response: bool = False

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "State":
        return cls(
            name=_as_str(data.get("name")),
            action=_as_str(data.get("action")),
            action_arg=_as_str(data.get("action_arg")),
            wait_for_event=bool(data.get("waitForEvent", False)),
            send_response=bool(data.get("sendResponse", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name, "action": self.action}
        if self.action_arg:
            out["action_arg"] = self.action_arg
        out["waitForEvent"] = self.wait_for_event
        out["sendResponse"] = self.send_response
        return out


@dataclass(frozen=True)
class Transition:
    """An edge out of ``from_state``, optionally gated on ``event``.

    An empty ``event`` makes the transition unconditional (automatic).
    """

    from_state: str
    to_success: str
    to_failure: str = ""
    branch: bool = False
    event: str = ""

    @property
    def is_automatic(self) -> bool:
        return not self.event

    def destination(self, outcome: bool) -> str:
        """Pick the next state from the action outcome."""
        if self.branch and not outcome:
            return self.to_failure
        return self.to_success

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Transition":
        return cls(
            from_state=_as_str(data.get("from")),
            to_success=_as_str(data.get("toSuccess")),
            to_failure=_as_str(data.get("toFailure")),
            branch=bool(data.get("branch", False)),
            event=_as_str(data.get("event")),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"from": self.from_state, "toSuccess": self.to_success}
        if self.to_failure:
            out["toFailure"] = self.to_failure
        out["branch"] = self.branch
        if self.event:
            out["event"] = self.event
        return out


_RESERVED_KEYS = frozenset({"initialState", "states", "transitions", "events"})


@dataclass(frozen=True)
class MachineSpec:
    """Parsed machine configuration, before semantic validation."""

    initial_state: str
    states: tuple[State, ...]
    transitions: tuple[Transition, ...]
    events: tuple[str, ...] = ()
    settings: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def expected_code(self) -> str:
        return _as_str(self.settings.get("expectedCode"))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "MachineSpec":
        """Build a spec from the configuration mapping.

        Top-level keys other than the structural ones (``expectedCode`` and
        anything else) become read-only ``settings`` for handlers.
        """
        states = tuple(State.from_mapping(s or {}) for s in data.get("states") or [])
        transitions = tuple(
            Transition.from_mapping(t or {}) for t in data.get("transitions") or []
        )
        events = tuple(_as_str(e) for e in data.get("events") or [])
        settings = {k: v for k, v in data.items() if k not in _RESERVED_KEYS}
        settings.setdefault("expectedCode", "")
        return cls(
            initial_state=_as_str(data.get("initialState")),
            states=states,
            transitions=transitions,
            events=events,
            settings=MappingProxyType(settings),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"initialState": self.initial_state}
        out.update(self.settings)
        out["states"] = [s.to_dict() for s in self.states]
        out["transitions"] = [t.to_dict() for t in self.transitions]
        out["events"] = list(self.events)
        return out


__all__ = ["State", "Transition", "MachineSpec"]
