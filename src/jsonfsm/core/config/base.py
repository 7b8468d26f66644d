"""Base class for section-specific settings accessors.

Provides a standardized pattern for settings sections with:
- One merged settings dict shared by all accessors
- Type-safe section access with bundled defaults as fallback
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from functools import cached_property
from typing import Any, Dict, Mapping, Optional


class BaseDomainConfig(ABC):
    """Abstract base class for settings section accessors.

    Example:
        class ServerConfig(BaseDomainConfig):
            def _config_section(self) -> str:
                return "server"

            @cached_property
            def port(self) -> int:
                return int(self.section.get("port", 3000))

        ServerConfig(settings).port
    """

    def __init__(self, settings: Optional[Mapping[str, Any]] = None) -> None:
        """Initialize from merged settings.

        Args:
            settings: Output of ``ConfigManager.load_settings()``. Loaded with
                defaults and environment overrides when None.
        """
        if settings is None:
            from .manager import ConfigManager

            settings = ConfigManager().load_settings()
        self._config = settings

    @abstractmethod
    def _config_section(self) -> str:
        """Return the top-level settings key for this section."""
        ...

    @cached_property
    def section(self) -> Dict[str, Any]:
        """This section's settings, or an empty dict if absent."""
        return dict(self._config.get(self._config_section(), {}) or {})


__all__ = ["BaseDomainConfig"]
