"""HTTP ingress: turns posted events into engine calls."""
from .app import create_app
from .errors import error_payload, status_for
from .models import EventRequest

__all__ = ["create_app", "error_payload", "status_for", "EventRequest"]
