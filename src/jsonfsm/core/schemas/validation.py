"""JSON Schema checks for machine definitions and runtime settings.

The schemas live in ``jsonfsm/data/schemas`` as YAML documents. Validation
collects every violation so a user sees all problems of a file at once.
"""
from __future__ import annotations

from typing import Any, Dict, List

import jsonschema
from jsonschema import Draft202012Validator

from jsonfsm.data import get_data_path, read_yaml

SCHEMA_SUFFIX = ".schema.yaml"


def load_schema(schema_name: str) -> Dict[str, Any]:
    """Return the bundled schema called ``schema_name``.

    ``"machine"`` and ``"machine.schema.yaml"`` name the same file.

    Raises:
        FileNotFoundError: No such schema is bundled.
        ValueError: The file is not a YAML mapping.
    """
    filename = schema_name if schema_name.lower().endswith((".yaml", ".yml")) else schema_name + SCHEMA_SUFFIX
    if not get_data_path("schemas", filename).is_file():
        raise FileNotFoundError(f"Schema not found: {filename}")

    schema = read_yaml("schemas", filename)
    if not isinstance(schema, dict):
        raise ValueError(f"Schema {filename} must be a YAML mapping, got {type(schema).__name__}")
    return schema


def _describe(error: jsonschema.ValidationError) -> str:
    if not error.path:
        return error.message
    return ".".join(str(p) for p in error.path) + f": {error.message}"


def iter_errors(payload: Any, schema_name: str) -> List[str]:
    """All violations of ``payload``, ordered by location (empty when valid)."""
    validator = Draft202012Validator(load_schema(schema_name))
    found = sorted(validator.iter_errors(payload), key=lambda e: [str(p) for p in e.path])
    return [_describe(e) for e in found]


__all__ = [
    "load_schema",
    "iter_errors",
]
