"""Text and JSON output for CLI commands.

Every command builds one ``OutputFormatter`` from its ``--json`` flag and
routes results and errors through it, so ``--json`` output is always a
single parseable document on stdout (errors go to stderr).
"""
from __future__ import annotations

import json
import sys
from typing import Any, Dict, Optional, TextIO


class OutputFormatter:
    """Render command results as human text or as JSON."""

    def __init__(self, json_mode: bool = False, indent: int = 2):
        self.json_mode = json_mode
        self.indent = indent

    def _dump(self, data: Any, stream: Optional[TextIO] = None) -> None:
        # Resolved per call so redirected stdout is honoured.
        print(json.dumps(data, indent=self.indent, default=str), file=stream or sys.stdout)

    def success(self, data: Dict[str, Any], message: str, *, status: str = "success") -> None:
        """Report a result: ``message`` in text mode, ``data`` plus ``status`` in JSON."""
        if self.json_mode:
            self._dump({"status": status, **data})
        else:
            print(message)

    def error(self, error: Exception, message: Optional[str] = None, *, error_code: str = "error") -> None:
        """Report a failure on stderr.

        JSON output carries ``error_code``, the message and, for validation
        failures, every collected problem under ``details``.
        """
        msg = message or str(error)
        if not self.json_mode:
            print(f"Error: {msg}", file=sys.stderr)
            return
        body: Dict[str, Any] = {"error": error_code, "message": msg}
        details = getattr(error, "errors", None)
        if details:
            body["details"] = list(details)
        self._dump(body, sys.stderr)

    def json_output(self, data: Any) -> None:
        self._dump(data)

    def text(self, message: str) -> None:
        """Print ``message`` unless in JSON mode."""
        if not self.json_mode:
            print(message)


__all__ = ["OutputFormatter"]
