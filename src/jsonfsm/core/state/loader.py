"""Dynamic handler loader for state machine actions.

Loads Python callables from layered folders:
- Core:   core/state/builtin/actions/
- Extra:  directories named by the ``handlers.paths`` setting or ``--handlers``

Handlers are registered into an action registry and become available to the
engine under their registry names.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional

from jsonfsm.core.utils.loader import load_and_register_modules

if TYPE_CHECKING:
    from .actions import ActionRegistry

logger = logging.getLogger(__name__)

# Core handlers directory (relative to this file)
_CORE_HANDLERS_DIR = Path(__file__).parent / "builtin" / "actions"


def load_builtin_actions(registry: Optional["ActionRegistry"] = None) -> int:
    """Register the built-in actions.

    Returns:
        Number of actions loaded
    """
    if registry is None:
        from .actions import registry as action_registry

        registry = action_registry
    return load_and_register_modules([_CORE_HANDLERS_DIR], registry.add, "jsonfsm.actions")


def load_actions(
    extra_dirs: Optional[List[Path]] = None,
    registry: Optional["ActionRegistry"] = None,
) -> int:
    """Load and register actions from the core layer and ``extra_dirs``.

    Later layers override earlier ones (extra dirs > core).

    Returns:
        Number of actions loaded
    """
    if registry is None:
        from .actions import registry as action_registry

        registry = action_registry

    count = load_builtin_actions(registry)
    dirs = [Path(d).expanduser() for d in (extra_dirs or [])]
    for d in dirs:
        if not d.is_dir():
            logger.warning("Handler directory does not exist: %s", d)
    count += load_and_register_modules(dirs, registry.add, "jsonfsm.user_actions")

    logger.debug("Loaded %d action handlers: %s", count, sorted(registry.names()))
    return count


__all__ = ["load_builtin_actions", "load_actions"]
