"""Bundled data: settings defaults, JSON schemas and example machines.

Files are located through ``importlib.resources`` so they resolve the same
way from a source checkout and from an installed wheel.
"""

from __future__ import annotations

from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

import yaml


def get_data_path(subpackage: str, filename: str = "") -> Path:
    """Path of a bundled directory, or of ``filename`` inside it.

    Example:
        >>> get_data_path("examples", "alarm-panel.json").name
        'alarm-panel.json'
    """
    root = Path(str(resources.files("jsonfsm.data") / subpackage))
    return root / filename if filename else root


@lru_cache(maxsize=32)
def read_yaml(subpackage: str, filename: str) -> Any:
    """Parse a bundled YAML file. Results are cached per file."""
    return yaml.safe_load(get_data_path(subpackage, filename).read_text(encoding="utf-8"))


def clear_caches() -> None:
    read_yaml.cache_clear()


__all__ = ["get_data_path", "read_yaml", "clear_caches"]
