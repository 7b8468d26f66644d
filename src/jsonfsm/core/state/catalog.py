"""Validated catalog of states and transitions.

The catalog is built once from a ``MachineSpec`` and is read-only afterwards.
Construction checks every structural invariant and raises
``ConfigValidationError`` listing all the problems at once; softer findings
(ambiguous matches, unreachable states, undeclared events) are collected in
``Catalog.warnings`` and logged.

Transition lookup is a linear scan in declaration order and the first match
wins, so authors resolve ambiguity by ordering their transitions.
"""
from __future__ import annotations

import logging
from collections import Counter
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..exceptions import ConfigValidationError, StateNotFoundError
from ..schemas.validation import iter_errors
from .models import MachineSpec, State, Transition

logger = logging.getLogger(__name__)


class Catalog:
    """States and transitions of one machine definition."""

    def __init__(
        self,
        initial_state: str,
        states: Iterable[State],
        transitions: Iterable[Transition],
        *,
        events: Iterable[str] = (),
        settings: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.initial_state = initial_state
        self.states: tuple[State, ...] = tuple(states)
        self.transitions: tuple[Transition, ...] = tuple(transitions)
        self.events: tuple[str, ...] = tuple(events)
        self.settings: Mapping[str, Any] = settings if settings is not None else {}
        self._by_name: Dict[str, State] = {}
        for state in self.states:
            self._by_name.setdefault(state.name, state)
        self.warnings: List[str] = []

    @classmethod
    def from_spec(cls, spec: MachineSpec) -> "Catalog":
        """Build and validate a catalog.

        Raises:
            ConfigValidationError: If any invariant is violated.
        """
        catalog = cls(
            spec.initial_state,
            spec.states,
            spec.transitions,
            events=spec.events,
            settings=spec.settings,
        )
        catalog.validate()
        return catalog

    @classmethod
    def from_mapping(cls, data: Any) -> "Catalog":
        """Check ``data`` against the machine schema, then build the catalog.

        Raises:
            ConfigValidationError: Malformed structure or violated invariant.
        """
        errors = iter_errors(data, "machine")
        if errors:
            raise ConfigValidationError(
                f"Machine definition does not match the schema: {errors[0]}",
                errors=errors,
            )
        return cls.from_spec(MachineSpec.from_mapping(data))

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def has_state(self, name: str) -> bool:
        return name in self._by_name

    def get_state(self, name: str) -> State:
        """Return the state called ``name``.

        Raises:
            StateNotFoundError: If no such state exists.
        """
        state = self._by_name.get(name)
        if state is None:
            raise StateNotFoundError(name)
        return state

    def state_names(self) -> List[str]:
        return [s.name for s in self.states]

    def find_transition(self, from_state: str, event: str = "") -> Optional[Transition]:
        """Return the first transition out of ``from_state`` matching ``event``.

        ``event == ""`` is the automatic-chain lookup and only matches
        unconditional transitions.
        """
        for t in self.transitions:
            if t.from_state == from_state and t.event == event:
                return t
        return None

    def transitions_from(self, from_state: str) -> List[Transition]:
        return [t for t in self.transitions if t.from_state == from_state]

    def events_for(self, from_state: str) -> List[str]:
        """Events accepted in ``from_state``, in declaration order."""
        seen: List[str] = []
        for t in self.transitions_from(from_state):
            if t.event and t.event not in seen:
                seen.append(t.event)
        return seen

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate(self) -> None:
        """Check the invariants, record warnings, raise on errors."""
        errors: List[str] = []
        errors.extend(self._check_states())
        errors.extend(self._check_transition_targets())
        errors.extend(self._check_automatic_transitions())

        self.warnings = []
        self.warnings.extend(self._find_ambiguous_transitions())
        self.warnings.extend(self._find_unreachable_transitions())
        self.warnings.extend(self._find_undeclared_events())
        if not errors:
            self.warnings.extend(self._find_unreachable_states())

        for warning in self.warnings:
            logger.warning("Configuration warning: %s", warning)

        if errors:
            raise ConfigValidationError(
                f"Invalid state machine configuration ({len(errors)} error(s)): {errors[0]}",
                errors=errors,
            )

    def _check_states(self) -> List[str]:
        errors: List[str] = []
        if not self.states:
            errors.append("at least one state is required")
        for idx, state in enumerate(self.states):
            if not state.name:
                errors.append(f"states[{idx}]: name must be a non-empty string")
            if not state.action:
                errors.append(f"state '{state.name}': action must be a non-empty string")
        counts = Counter(s.name for s in self.states if s.name)
        for name, count in counts.items():
            if count > 1:
                errors.append(f"state '{name}' is declared {count} times")
        if not self.initial_state:
            errors.append("initialState is required")
        elif not self.has_state(self.initial_state):
            errors.append(f"initialState '{self.initial_state}' is not a declared state")
        return errors

    def _check_transition_targets(self) -> List[str]:
        errors: List[str] = []
        for idx, t in enumerate(self.transitions):
            where = f"transitions[{idx}] ({t.from_state or '?'} -> {t.to_success or '?'})"
            if not self.has_state(t.from_state):
                errors.append(f"{where}: unknown source state '{t.from_state}'")
            if not self.has_state(t.to_success):
                errors.append(f"{where}: unknown toSuccess state '{t.to_success}'")
            if t.branch:
                if not t.to_failure:
                    errors.append(f"{where}: branch transitions require toFailure")
                elif not self.has_state(t.to_failure):
                    errors.append(f"{where}: unknown toFailure state '{t.to_failure}'")
            elif t.to_failure:
                errors.append(f"{where}: toFailure is only allowed when branch is true")
        return errors

    def _check_automatic_transitions(self) -> List[str]:
        errors: List[str] = []
        for state in self.states:
            if state.wait_for_event:
                continue
            automatic = [t for t in self.transitions_from(state.name) if t.is_automatic]
            if not automatic:
                errors.append(
                    f"state '{state.name}' does not wait for events but has no transition without event"
                )
            elif len(automatic) > 1:
                errors.append(
                    f"state '{state.name}' has {len(automatic)} transitions without event; "
                    "automatic chaining needs exactly one"
                )
        return errors

    def _find_ambiguous_transitions(self) -> List[str]:
        warnings: List[str] = []
        counts = Counter((t.from_state, t.event) for t in self.transitions if t.event)
        for (from_state, event), count in counts.items():
            if count > 1:
                warnings.append(
                    f"state '{from_state}' has {count} transitions for event '{event}'; "
                    "the first declared one wins"
                )
        return warnings

    def _find_unreachable_transitions(self) -> List[str]:
        warnings: List[str] = []
        for t in self.transitions:
            state = self._by_name.get(t.from_state)
            if state is not None and t.event and not state.wait_for_event:
                warnings.append(
                    f"transition {t.from_state} -> {t.to_success} on '{t.event}' can never fire: "
                    f"state '{t.from_state}' does not wait for events"
                )
        return warnings

    def _find_undeclared_events(self) -> List[str]:
        if not self.events:
            return []
        declared = set(self.events)
        warnings: List[str] = []
        for t in self.transitions:
            if t.event and t.event not in declared:
                warnings.append(f"transition {t.from_state} -> {t.to_success} uses undeclared event '{t.event}'")
        return warnings

    def _find_unreachable_states(self) -> List[str]:
        reachable = {self.initial_state}
        pending = [self.initial_state]
        while pending:
            current = pending.pop()
            for t in self.transitions_from(current):
                for target in (t.to_success, t.to_failure):
                    if target and target not in reachable:
                        reachable.add(target)
                        pending.append(target)
        return [
            f"state '{name}' is unreachable from initialState '{self.initial_state}'"
            for name in self.state_names()
            if name not in reachable
        ]

    def to_dict(self) -> dict[str, Any]:
        spec = MachineSpec(
            initial_state=self.initial_state,
            states=self.states,
            transitions=self.transitions,
            events=self.events,
            settings=dict(self.settings),
        )
        return spec.to_dict()


__all__ = ["Catalog"]
