from __future__ import annotations

import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from jsonfsm.core.audit.jsonl import append_jsonl

_AUDIT_PATH: Path | None = None


def configure_audit(path: Path | None) -> None:
    """Enable the JSONL audit trail at `path`, or disable it with None."""
    global _AUDIT_PATH
    _AUDIT_PATH = Path(path).expanduser().resolve() if path is not None else None


def audit_path() -> Path | None:
    return _AUDIT_PATH


def audit_event(event: str, **fields: Any) -> None:
    """Emit a single structured audit event as JSONL (fail-open).

    This is separate from stdlib `logging` so the trail stays machine-readable.
    No-op until `configure_audit` has been given a path.
    """
    path = _AUDIT_PATH
    if path is None:
        return

    payload: dict[str, Any] = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "event": event,
        "pid": os.getpid(),
    }
    payload.update(fields)
    append_jsonl(path=path, payload=payload)


__all__ = ["audit_event", "audit_path", "configure_audit"]
