from .logger import audit_event, audit_path, configure_audit
from .stdlib_logging import configure_stdlib_logging, reset_stdlib_logging_for_tests

__all__ = [
    "audit_event",
    "audit_path",
    "configure_audit",
    "configure_stdlib_logging",
    "reset_stdlib_logging_for_tests",
]
