from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_JSONFSM_HANDLER: logging.Handler | None = None
_CONFIGURED_TARGET: str | None = None


def _level_from_name(name: str) -> int:
    try:
        return int(getattr(logging, str(name).upper()))
    except Exception:
        return logging.INFO


def configure_stdlib_logging(*, level: str = "INFO", log_path: Path | None = None) -> None:
    """Configure Python stdlib logging for a jsonfsm process.

    Installs a single handler on the root logger: a file handler when
    `log_path` is given, otherwise a stderr stream handler. Idempotent
    per-process: calling again with the same target only updates the level.
    """
    global _JSONFSM_HANDLER, _CONFIGURED_TARGET

    target = str(Path(log_path).resolve()) if log_path is not None else "<stderr>"
    root = logging.getLogger()
    root.setLevel(_level_from_name(level))

    if _CONFIGURED_TARGET == target and _JSONFSM_HANDLER is not None:
        _JSONFSM_HANDLER.setLevel(_level_from_name(level))
        return

    # Replace the jsonfsm-installed handler when switching targets.
    if _JSONFSM_HANDLER is not None:
        try:
            root.removeHandler(_JSONFSM_HANDLER)
        except Exception:
            pass
        try:
            _JSONFSM_HANDLER.close()
        except Exception:
            pass
        _JSONFSM_HANDLER = None

    if log_path is not None:
        Path(target).parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(target, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(_level_from_name(level))
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)

    _JSONFSM_HANDLER = handler
    _CONFIGURED_TARGET = target


def reset_stdlib_logging_for_tests() -> None:
    """Test-only: remove the handler installed by configure_stdlib_logging."""
    global _JSONFSM_HANDLER, _CONFIGURED_TARGET
    root = logging.getLogger()
    if _JSONFSM_HANDLER is not None:
        root.removeHandler(_JSONFSM_HANDLER)
        try:
            _JSONFSM_HANDLER.close()
        except Exception:
            pass
    _JSONFSM_HANDLER = None
    _CONFIGURED_TARGET = None


__all__ = ["LOG_FORMAT", "configure_stdlib_logging", "reset_stdlib_logging_for_tests"]
