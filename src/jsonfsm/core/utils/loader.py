"""Load Python files from directories and register what they export.

Used for action handlers: the built-in directory is loaded first, then each
user directory, so a later file can rebind a name an earlier one registered.
"""
from __future__ import annotations

import importlib.util
import logging
from pathlib import Path
from types import ModuleType
from typing import Callable, Iterable, Iterator, Mapping, Optional

logger = logging.getLogger(__name__)

# Optional module attribute mapping registry names to callables.
EXPORT_ATTRIBUTE = "ACTIONS"

RegisterFn = Callable[[str, Callable[..., object]], None]


def iter_python_files(dirs: Iterable[Path]) -> Iterator[Path]:
    """``*.py`` files of each existing directory, sorted, skipping ``_``-prefixed ones."""
    for d in dirs:
        if not d.is_dir():
            continue
        for path in sorted(d.glob("*.py")):
            if path.is_file() and not path.name.startswith("_"):
                yield path


def load_module_from_path(path: Path, namespace: str = "jsonfsm.dynamic") -> Optional[ModuleType]:
    """Execute ``path`` as module ``<namespace>.<stem>`` (not added to sys.modules).

    A file that fails to import is logged and skipped; returns None.
    """
    spec = importlib.util.spec_from_file_location(f"{namespace}.{path.stem}", path)
    if spec is None or spec.loader is None:
        logger.warning("Cannot load handler module %s", path)
        return None
    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        logger.warning("Failed to load module %s: %s", path, e)
        return None
    return module


def register_callables_from_module(module: ModuleType, register_fn: RegisterFn) -> int:
    """Register the handlers ``module`` exports; return how many.

    An ``ACTIONS`` mapping wins. Without one, every public function defined
    in the module itself is registered under its own name.
    """
    exported = getattr(module, EXPORT_ATTRIBUTE, None)
    if isinstance(exported, Mapping):
        items = [(str(name), fn) for name, fn in exported.items()]
    else:
        items = [
            (name, obj)
            for name, obj in vars(module).items()
            if not name.startswith("_")
            and callable(obj)
            and not isinstance(obj, type)
            and getattr(obj, "__module__", None) == module.__name__
        ]
    for name, fn in items:
        register_fn(name, fn)
    return len(items)


def load_and_register_modules(
    dirs: Iterable[Path],
    register_fn: RegisterFn,
    namespace: str = "jsonfsm.dynamic",
) -> int:
    """Load every module under ``dirs`` in order and register its handlers."""
    total = 0
    for path in iter_python_files(dirs):
        module = load_module_from_path(path, namespace)
        if module is not None:
            total += register_callables_from_module(module, register_fn)
    return total


__all__ = [
    "EXPORT_ATTRIBUTE",
    "iter_python_files",
    "load_module_from_path",
    "register_callables_from_module",
    "load_and_register_modules",
]
