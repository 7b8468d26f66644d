"""Request and response bodies of the HTTP ingress."""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel


class EventRequest(BaseModel):
    """Event submitted by a client: ``action`` is the event name."""

    action: str
    param: str = ""


class ErrorResponse(BaseModel):
    error: str
    code: str


class StateResponse(BaseModel):
    machine: str
    status: str
    state: Optional[str] = None
    waitForEvent: Optional[bool] = None
    events: List[str] = []


__all__ = ["EventRequest", "ErrorResponse", "StateResponse"]
