"""Append-only JSONL writer backing the audit trail."""
from __future__ import annotations

import json
import os
import threading
from pathlib import Path
from typing import Any

_WRITE_LOCK = threading.Lock()


def _plain(value: Any) -> Any:
    """Reduce ``value`` to something ``json.dumps`` accepts."""
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_plain(v) for v in value]
    if isinstance(value, dict):
        return {str(k): _plain(v) for k, v in value.items()}
    return value


def append_jsonl(*, path: Path, payload: dict[str, Any]) -> None:
    """Append ``payload`` as one line of ``path``.

    Fail-open: serialization and I/O errors are dropped.
    """
    try:
        line = json.dumps(_plain(payload), ensure_ascii=False, default=str) + "\n"
        path.parent.mkdir(parents=True, exist_ok=True)
        with _WRITE_LOCK, path.open("a", encoding="utf-8") as fh:
            fh.write(line)
            fh.flush()
            os.fsync(fh.fileno())
    except (OSError, TypeError, ValueError):
        return


__all__ = ["append_jsonl"]
