"""Handler registry base classes."""
from .registries import ActionRegistryBase, HandlerRegistry, register_action

__all__ = [
    "HandlerRegistry",
    "ActionRegistryBase",
    "register_action",
]
