"""
jsonfsm configuration management.

Two kinds of configuration are handled here:

- the machine definition (states, transitions, events) given on the command
  line, as YAML or JSON;
- runtime settings (server, logging, audit, handler directories).
"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Union

import yaml

from jsonfsm.core.exceptions import ConfigValidationError
from jsonfsm.core.schemas.validation import iter_errors
from jsonfsm.core.state.catalog import Catalog
from jsonfsm.core.state.models import MachineSpec
from jsonfsm.core.utils.merge import deep_merge as _deep_merge
from jsonfsm.data import get_data_path

logger = logging.getLogger(__name__)


class ConfigManager:
    """Load, merge, and validate jsonfsm configuration.

    Settings sources (highest to lowest priority):
    1. Explicit overrides (CLI flags)
    2. Environment variables: JSONFSM_<section>__<key>
    3. Settings file (``--settings``), if any
    4. Bundled defaults: jsonfsm.data/config/defaults.yaml
    """

    ENV_PREFIX = "JSONFSM_"

    def __init__(self, settings_path: Optional[Path] = None) -> None:
        self.settings_path = Path(settings_path) if settings_path else None
        # Bundled defaults from jsonfsm.data package (always available)
        self.defaults_path = get_data_path("config", "defaults.yaml")

    def deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge dictionaries. Delegates to shared implementation."""
        return _deep_merge(base, override)

    def load_yaml(self, path: Path) -> Any:
        """Read a YAML (or JSON) document.

        Fail closed: a missing, unreadable or malformed file raises
        ``ConfigValidationError``.
        """
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigValidationError(
                f"Cannot read configuration file {path}: {exc.strerror or exc}",
                context={"path": str(path)},
            ) from exc
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigValidationError(
                f"Malformed configuration file {path}: {exc}",
                context={"path": str(path)},
            ) from exc

    # ========== Environment overrides ==========

    def _as_bool(self, v: str) -> Optional[bool]:
        low = v.strip().lower()
        if low in {"true", "false"}:
            return low == "true"
        return None

    def _as_int(self, v: str) -> Optional[int]:
        if re.fullmatch(r"[-+]?\d+", v.strip() or " "):
            return int(v)
        return None

    def _as_float(self, v: str) -> Optional[float]:
        s = v.strip()
        if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
            return float(s)
        return None

    def _as_json(self, v: str) -> Optional[Any]:
        s = v.strip()
        if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
            try:
                return json.loads(s)
            except ValueError:
                return None
        return None

    def _coerce_type(self, value: str) -> Any:
        for caster in (self._as_bool, self._as_int, self._as_float, self._as_json):
            result = caster(value)
            if result is not None:
                return result
        return value.strip()

    def _parse_env_key(self, raw: str) -> List[str]:
        segs = raw.split("__")
        if any(seg == "" for seg in segs):
            logger.warning("Ignoring malformed %s* key: %s", self.ENV_PREFIX, raw)
            return []
        # Normalize to lowercase so env overrides create canonical keys.
        return [seg.lower() for seg in segs]

    def _iter_env_overrides(self) -> Iterator[Tuple[List[str], Any]]:
        for key in sorted(os.environ.keys()):
            if not key.startswith(self.ENV_PREFIX):
                continue
            path = self._parse_env_key(key[len(self.ENV_PREFIX):])
            if not path:
                continue
            yield path, self._coerce_type(os.environ[key])

    def _set_nested(self, root: Dict[str, Any], path: List[str], value: Any) -> None:
        cur = root
        for part in path[:-1]:
            key_candidates = {k.lower(): k for k in cur.keys() if isinstance(k, str)}
            key_to_use = key_candidates.get(part, part)
            nxt = cur.get(key_to_use)
            if not isinstance(nxt, dict):
                nxt = {}
                cur[key_to_use] = nxt
            cur = nxt
        lower_map = {k.lower(): k for k in cur.keys() if isinstance(k, str)}
        cur[lower_map.get(path[-1], path[-1])] = value

    def apply_env_overrides(self, cfg: Dict[str, Any]) -> None:
        for path, typed_value in self._iter_env_overrides():
            self._set_nested(cfg, path, typed_value)

    # ========== Settings ==========

    def load_settings(
        self,
        overrides: Optional[Mapping[str, Any]] = None,
        *,
        validate: bool = True,
    ) -> Dict[str, Any]:
        """Return merged runtime settings.

        Raises:
            ConfigValidationError: If the settings file cannot be read or the
                merged settings do not match the settings schema.
        """
        cfg: Dict[str, Any] = self.load_yaml(self.defaults_path) or {}
        if self.settings_path is not None:
            data = self.load_yaml(self.settings_path)
            if data is not None and not isinstance(data, dict):
                raise ConfigValidationError(
                    f"Settings file {self.settings_path} must contain a mapping",
                    context={"path": str(self.settings_path)},
                )
            cfg = self.deep_merge(cfg, data or {})
        self.apply_env_overrides(cfg)
        if overrides:
            cfg = self.deep_merge(cfg, dict(overrides))

        if validate:
            errors = iter_errors(cfg, "settings")
            if errors:
                raise ConfigValidationError(
                    f"Invalid settings: {errors[0]}",
                    errors=errors,
                )
        return cfg

    # ========== Machine definitions ==========

    def load_machine(self, path: Union[str, Path]) -> MachineSpec:
        """Read and structurally validate a machine definition file.

        Raises:
            ConfigValidationError: Unreadable, malformed, or schema-invalid file.
        """
        path = Path(path)
        data = self.load_yaml(path)
        if not isinstance(data, dict):
            raise ConfigValidationError(
                f"Machine definition {path} must contain a mapping",
                context={"path": str(path)},
            )
        errors = iter_errors(data, "machine")
        if errors:
            raise ConfigValidationError(
                f"Machine definition {path} does not match the schema: {errors[0]}",
                errors=errors,
                context={"path": str(path)},
            )
        return MachineSpec.from_mapping(data)

    def load_catalog(self, path: Union[str, Path]) -> Catalog:
        """Read a machine definition and build its validated catalog."""
        spec = self.load_machine(path)
        try:
            return Catalog.from_spec(spec)
        except ConfigValidationError as exc:
            exc.context.setdefault("path", str(path))
            raise


__all__ = ["ConfigManager"]
