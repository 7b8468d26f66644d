from .actions import ActionRegistry, registry as action_registry
from .catalog import Catalog
from .context import ActionContext, BufferedResponder, Responder
from .engine import EngineStatus, StateMachine, TransitionResult
from .handlers.registries import (
    ActionRegistryBase,
    HandlerRegistry,
    # Registration decorators
    register_action,
)
from .loader import load_actions, load_builtin_actions
from .models import MachineSpec, State, Transition

__all__ = [
    # Data model
    "State",
    "Transition",
    "MachineSpec",
    "Catalog",
    # Core state machine
    "StateMachine",
    "EngineStatus",
    "TransitionResult",
    # Handler context
    "ActionContext",
    "Responder",
    "BufferedResponder",
    # Registries
    "HandlerRegistry",
    "ActionRegistryBase",
    "ActionRegistry",
    "action_registry",
    "register_action",
    # Loader functions
    "load_actions",
    "load_builtin_actions",
]
