"""JSON Schema validation helpers."""
from .validation import iter_errors, load_schema

__all__ = ["iter_errors", "load_schema"]
