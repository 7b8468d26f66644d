"""jsonfsm configuration system.

Usage:
    from jsonfsm.core.config import ConfigManager, ServerConfig

    manager = ConfigManager(settings_path=Path("settings.yaml"))
    settings = manager.load_settings()
    server = ServerConfig(settings)

    catalog = manager.load_catalog(Path("machine.yaml"))
"""
from __future__ import annotations

from .base import BaseDomainConfig
from .domains import AuditConfig, HandlersConfig, LoggingConfig, ServerConfig
from .manager import ConfigManager

__all__ = [
    # Core
    "ConfigManager",
    "BaseDomainConfig",
    # Section accessors
    "ServerConfig",
    "LoggingConfig",
    "AuditConfig",
    "HandlersConfig",
]
