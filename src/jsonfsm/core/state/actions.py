"""Action registry for state machine transitions.

Actions are the handlers bound to states by name. Each one receives the
argument of the transition (the event parameter, or the state's own
``action_arg`` during automatic chaining) plus an ``ActionContext``, and
returns the boolean outcome used for branching.

Built-in actions live in core/state/builtin/actions/ and are registered by
the handler loader; extra directories can be layered on top.
"""
from __future__ import annotations

from typing import Any, Callable

from .handlers.registries import ActionRegistryBase

ActionHandler = Callable[[str, Any], bool]


class ActionRegistry(ActionRegistryBase):
    """Registry of action handlers keyed by action name.

    Actions are loaded with layered composition:
    - Core (builtin): core/state/builtin/actions/
    - Extra directories: ``handlers.paths`` setting or ``--handlers``

    Later layers override earlier ones.
    """

    def __init__(self, *, preload_defaults: bool = False) -> None:
        """Initialize registry.

        Args:
            preload_defaults: If True, register the built-in actions
        """
        super().__init__(preload_defaults=preload_defaults)

    def register_defaults(self) -> None:
        """Register the built-in actions."""
        from .loader import load_builtin_actions

        load_builtin_actions(self)


# Global registry instance
registry = ActionRegistry(preload_defaults=True)

__all__ = ["ActionHandler", "ActionRegistry", "registry"]
