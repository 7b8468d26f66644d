"""Accessors for the runtime settings sections."""
from __future__ import annotations

from functools import cached_property
from pathlib import Path
from typing import List, Optional

from .base import BaseDomainConfig


class ServerConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "server"

    @cached_property
    def host(self) -> str:
        return str(self.section.get("host") or "0.0.0.0")

    @cached_property
    def port(self) -> int:
        return int(self.section.get("port", 3000))

    @cached_property
    def path(self) -> str:
        return str(self.section.get("path") or "/send_event")


class LoggingConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "logging"

    @cached_property
    def level(self) -> str:
        return str(self.section.get("level") or "INFO").upper()

    @cached_property
    def file(self) -> Optional[Path]:
        raw = self.section.get("file")
        return Path(raw).expanduser() if raw else None


class AuditConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "audit"

    @cached_property
    def enabled(self) -> bool:
        return bool(self.section.get("enabled", False))

    @cached_property
    def path(self) -> Path:
        return Path(self.section.get("path") or "jsonfsm-audit.jsonl").expanduser()


class HandlersConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "handlers"

    @cached_property
    def paths(self) -> List[Path]:
        return [Path(p).expanduser() for p in self.section.get("paths") or []]


__all__ = ["ServerConfig", "LoggingConfig", "AuditConfig", "HandlersConfig"]
