"""Shared CLI utilities: settings, logging and machine construction."""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Dict, List, Optional

from jsonfsm.core.audit import configure_audit, configure_stdlib_logging
from jsonfsm.core.config import AuditConfig, ConfigManager, HandlersConfig, LoggingConfig
from jsonfsm.core.state import ActionRegistry, StateMachine, load_actions


def load_settings(args: argparse.Namespace, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Merged runtime settings for this invocation."""
    settings_path = getattr(args, "settings", None)
    manager = ConfigManager(Path(settings_path) if settings_path else None)
    merged = dict(overrides or {})
    if getattr(args, "verbose", False):
        merged.setdefault("logging", {})["level"] = "DEBUG"
    return manager.load_settings(merged)


def setup_logging(settings: Dict[str, Any]) -> None:
    """Install logging and the optional audit trail from settings."""
    log_cfg = LoggingConfig(settings)
    configure_stdlib_logging(level=log_cfg.level, log_path=log_cfg.file)
    audit_cfg = AuditConfig(settings)
    configure_audit(audit_cfg.path if audit_cfg.enabled else None)


def handler_dirs(args: argparse.Namespace, settings: Dict[str, Any]) -> List[Path]:
    dirs = list(HandlersConfig(settings).paths)
    dirs.extend(Path(d).expanduser() for d in getattr(args, "handlers", None) or [])
    return dirs


def build_machine(args: argparse.Namespace, settings: Dict[str, Any]) -> StateMachine:
    """Load the machine definition named on the command line.

    Raises:
        ConfigValidationError: If the definition cannot be read or is invalid.
    """
    config_path = Path(args.config)
    catalog = ConfigManager().load_catalog(config_path)
    actions = ActionRegistry()
    load_actions(handler_dirs(args, settings), actions)
    return StateMachine(catalog, actions, name=config_path.stem)


__all__ = ["load_settings", "setup_logging", "handler_dirs", "build_machine"]
