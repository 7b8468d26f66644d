"""Execution engine for declarative state machines.

The engine owns the current state. ``init``, ``set_state`` and
``send_event`` run under one lock together with every handler they invoke,
so a transition and its whole automatic chain are applied atomically with
respect to other callers. Handlers may read the machine (``snapshot``,
``current_state``) but starting another transition from inside one raises
``ReentrantTransitionError``.

A state that does not wait for an event is left immediately through its
unconditional transition, using the state's own ``action_arg`` as the
handler argument. Chains are resolved iteratively; entering the same
non-waiting state twice in one pass raises ``TransitionCycleDetectedError``.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Mapping, Optional

from ..audit import audit_event
from ..exceptions import (
    ActionInvocationError,
    HandlerNotRegisteredError,
    JsonFsmError,
    MachineNotInitializedError,
    ReentrantTransitionError,
    TransitionCycleDetectedError,
    TransitionNotFoundError,
)
from .actions import ActionRegistry
from .actions import registry as default_registry
from .catalog import Catalog
from .context import ActionContext, Responder
from .models import State, Transition

logger = logging.getLogger(__name__)


class EngineStatus(str, Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    TRANSITIONING = "transitioning"


@dataclass(frozen=True)
class TransitionResult:
    """Outcome of one engine call.

    ``path`` lists every state entered during the call, in order; its last
    element is ``to_state``.
    """

    event: str
    from_state: Optional[str]
    to_state: str
    path: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "event": self.event,
            "from": self.from_state,
            "to": self.to_state,
            "path": list(self.path),
        }


class StateMachine:
    """A running machine instance: catalog, handlers and the current state."""

    def __init__(
        self,
        catalog: Catalog,
        actions: Optional[ActionRegistry] = None,
        *,
        name: str = "machine",
    ) -> None:
        self.name = name
        self.catalog = catalog
        self.actions = actions if actions is not None else default_registry
        self._lock = threading.RLock()
        self._current: Optional[State] = None
        self._status = EngineStatus.UNINITIALIZED

    @classmethod
    def from_config(
        cls,
        data: Mapping[str, Any],
        actions: Optional[ActionRegistry] = None,
        *,
        name: str = "machine",
    ) -> "StateMachine":
        """Validate a parsed configuration mapping and build an engine."""
        return cls(Catalog.from_mapping(data), actions, name=name)

    @property
    def settings(self) -> Mapping[str, Any]:
        return self.catalog.settings

    @property
    def status(self) -> EngineStatus:
        with self._lock:
            return self._status

    @property
    def current_state(self) -> Optional[State]:
        with self._lock:
            return self._current

    def snapshot(self) -> dict[str, Any]:
        """Consistent view of the machine for introspection."""
        with self._lock:
            current = self._current
            return {
                "machine": self.name,
                "status": self._status.value,
                "state": current.name if current else None,
                "waitForEvent": current.wait_for_event if current else None,
                "events": self.catalog.events_for(current.name) if current else [],
            }

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def init(self, *, responder: Optional[Responder] = None) -> TransitionResult:
        """Enter ``initialState`` and resolve any automatic chain from it.

        Calling ``init`` again restarts the machine from ``initialState``.
        """
        with self._lock:
            self._guard_reentry("init")
            logger.debug("Initializing %s at %s", self.name, self.catalog.initial_state)
            return self._transact("", lambda path: self._enter(self.catalog.initial_state, path, responder))

    def set_state(self, name: str, *, responder: Optional[Responder] = None) -> TransitionResult:
        """Move to ``name``; auto-chain when that state does not wait.

        Raises:
            StateNotFoundError: Unknown state; the current state is unchanged.
        """
        with self._lock:
            self._guard_reentry("set state")
            self.catalog.get_state(name)
            return self._transact("", lambda path: self._enter(name, path, responder))

    def send_event(
        self,
        event: str,
        param: str = "",
        *,
        responder: Optional[Responder] = None,
    ) -> TransitionResult:
        """Deliver ``event`` with ``param`` as the action argument.

        An empty ``event`` only matches in a non-waiting state, where a
        failed automatic chain left the machine; it retries that chain with
        the state's own ``action_arg`` (``param`` is ignored).

        Raises:
            MachineNotInitializedError: ``init`` has not run yet.
            TransitionNotFoundError: Nothing matches the current state and
                event; the current state is unchanged.
            HandlerNotRegisteredError, ActionInvocationError: The action of
                the state being left could not run; the machine stays there.
            TransitionCycleDetectedError: The resulting chain never waits.
            ReentrantTransitionError: Called from a handler of this machine.
        """
        with self._lock:
            self._guard_reentry("send an event")
            current = self._current
            if current is None:
                raise MachineNotInitializedError()
            transition = self._match(current, event)
            if transition is None:
                audit_event("event.rejected", machine=self.name, state=current.name, name=event)
                raise TransitionNotFoundError(
                    current.name, event, allowed=self.catalog.events_for(current.name)
                )

            # An empty event resumes the chain of a non-waiting state with its own argument.
            argument = param if event else current.action_arg

            def run(path: List[str]) -> None:
                destination = self._fire(current, transition, argument, event, responder)
                self._enter(destination, path, responder)

            return self._transact(event, run)

    # ------------------------------------------------------------------
    # Internals (lock held)
    # ------------------------------------------------------------------

    def _guard_reentry(self, operation: str) -> None:
        if self._status is EngineStatus.TRANSITIONING:
            current = self._current.name if self._current else None
            logger.error("Rejected re-entrant call to %s from a handler (state %s)", operation, current)
            raise ReentrantTransitionError(operation, state=current)

    def _match(self, current: State, event: str) -> Optional[Transition]:
        # Unconditional transitions are only eligible from non-waiting states.
        if not event and current.wait_for_event:
            return None
        return self.catalog.find_transition(current.name, event)

    def _transact(self, event: str, run) -> TransitionResult:
        start = self._current.name if self._current else None
        path: List[str] = []
        self._status = EngineStatus.TRANSITIONING
        try:
            run(path)
        except JsonFsmError as exc:
            audit_event(
                "transition.failed",
                machine=self.name,
                name=event,
                from_state=start,
                state=self._current.name if self._current else None,
                path=path,
                error=exc.__class__.__name__,
            )
            raise
        finally:
            self._status = EngineStatus.READY if self._current else EngineStatus.UNINITIALIZED

        if self._current is None:
            raise MachineNotInitializedError()
        result = TransitionResult(event=event, from_state=start, to_state=self._current.name, path=tuple(path))
        audit_event(
            "transition.completed",
            machine=self.name,
            name=event,
            from_state=start,
            to_state=result.to_state,
            path=list(result.path),
        )
        return result

    def _enter(self, name: str, path: List[str], responder: Optional[Responder]) -> None:
        """Enter ``name`` and keep following automatic transitions."""
        state = self.catalog.get_state(name)
        visited: set[str] = set()
        while True:
            self._current = state
            path.append(state.name)
            logger.info("Current state: %s", state.name)
            if state.wait_for_event:
                return
            if state.name in visited:
                logger.error("Transition cycle detected: %s", " -> ".join(path))
                raise TransitionCycleDetectedError(path)
            visited.add(state.name)

            transition = self.catalog.find_transition(state.name, "")
            if transition is None:
                raise TransitionNotFoundError(state.name, "")
            destination = self._fire(state, transition, state.action_arg, "", responder)
            state = self.catalog.get_state(destination)

    def _fire(
        self,
        state: State,
        transition: Transition,
        argument: str,
        event: str,
        responder: Optional[Responder],
    ) -> str:
        """Run the action of ``state`` and return the chosen destination."""
        handler = self.actions.get(state.action)
        if handler is None:
            logger.error("No handler registered for action %r (state %r)", state.action, state.name)
            raise HandlerNotRegisteredError(state.action, state=state.name)

        ctx = ActionContext(state=state, event=event, settings=self.settings, responder=responder)
        try:
            outcome = bool(handler(argument, ctx))
        except Exception as exc:
            logger.error("Action %r failed in state %r: %s", state.action, state.name, exc)
            raise ActionInvocationError(state.action, state=state.name, cause=exc) from exc

        destination = transition.destination(outcome)
        logger.debug(
            "%s: %s(%r) -> %s, next state %s",
            state.name,
            state.action,
            argument,
            outcome,
            destination,
        )
        return destination


__all__ = ["EngineStatus", "StateMachine", "TransitionResult"]
