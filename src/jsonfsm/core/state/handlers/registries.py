"""Name-keyed registries for state machine action handlers.

States reference their action by name; the registry maps that name to a
callable. Re-registering a name replaces the previous binding.

Example usage:
    registry.register("Log", log_handler)
    registry.lookup("Log")("hello", ctx)

    @register_action("ValidateCode")
    def validate_code(arg, ctx):
        return arg == ctx.settings["expectedCode"]
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar

from ...exceptions import HandlerNotRegisteredError

T = TypeVar("T", bound=Callable[..., Any])


class HandlerRegistry(Generic[T], ABC):
    """Generic registry of named handlers."""

    def __init__(self, *, preload_defaults: bool = False) -> None:
        """``preload_defaults`` registers the built-in handlers right away."""
        self._handlers: Dict[str, T] = {}
        if preload_defaults:
            self.register_defaults()

    def register(self, name: str, handler: T) -> None:
        """Register a handler function. Overwrites if already registered."""
        if not callable(handler):
            raise TypeError("handler must be callable")
        self._handlers[str(name)] = handler

    def add(self, name: str, handler: T) -> None:
        """Same as ``register``."""
        self.register(name, handler)

    def get(self, name: str) -> Optional[T]:
        """Get a handler by name, or None."""
        return self._handlers.get(name)

    def has(self, name: str) -> bool:
        """True when ``name`` is bound."""
        return name in self._handlers

    def names(self) -> List[str]:
        """List all registered handler names."""
        return list(self._handlers)

    def reset(self) -> None:
        """Forget every binding, then register the defaults again."""
        self._handlers.clear()
        self.register_defaults()

    @abstractmethod
    def register_defaults(self) -> None:
        """Bind the handlers every fresh registry should have."""

    @abstractmethod
    def _invoke(self, name: str, argument: str, context: Any) -> Any:
        """Call the handler bound to ``name``."""


class ActionRegistryBase(HandlerRegistry[Callable[[str, Any], bool]]):
    """Base registry for action handlers ``(argument, ctx) -> bool``."""

    def lookup(self, name: str) -> Callable[[str, Any], bool]:
        """Return the handler bound to ``name``.

        Raises:
            HandlerNotRegisteredError: If nothing is bound to ``name``.
        """
        handler = self.get(name)
        if handler is None:
            raise HandlerNotRegisteredError(name)
        return handler

    def execute(self, name: str, argument: str = "", context: Any = None) -> bool:
        """Execute an action and return its boolean outcome."""
        return self._invoke(name, argument, context)

    def _invoke(self, name: str, argument: str, context: Any) -> bool:
        handler = self.lookup(name)
        return bool(handler(argument, context))


def _get_action_registry() -> "ActionRegistryBase":
    from ..actions import registry

    return registry


def register_action(name: str):
    """Decorator to register an action handler in the default registry."""

    def decorator(fn):
        _get_action_registry().register(name, fn)
        return fn

    return decorator


__all__ = [
    "HandlerRegistry",
    "ActionRegistryBase",
    "register_action",
]
