"""FastAPI application delivering events to a state machine.

Endpoints are plain (sync) functions, so the server runs them in its thread
pool and concurrent requests serialize on the engine's lock.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from jsonfsm import __version__
from jsonfsm.core.config.domains import ServerConfig
from jsonfsm.core.exceptions import JsonFsmError
from jsonfsm.core.state.context import BufferedResponder
from jsonfsm.core.state.engine import StateMachine

from .errors import error_payload, status_for
from .models import ErrorResponse, EventRequest, StateResponse

logger = logging.getLogger(__name__)


def _describe_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        msg = err.get("msg", "invalid value")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts) or "Malformed request body"


def create_app(machine: StateMachine, settings: Optional[Mapping[str, Any]] = None) -> FastAPI:
    """Build the HTTP ingress for ``machine``.

    ``machine`` must already be initialized; the app never calls ``init``.
    """
    server = ServerConfig(settings or {})
    app = FastAPI(
        title="jsonfsm",
        description=f"Event ingress for state machine '{machine.name}'",
        version=__version__,
    )
    app.state.machine = machine

    @app.exception_handler(RequestValidationError)
    async def bad_request(request: Request, exc: RequestValidationError) -> JSONResponse:
        message = _describe_validation_error(exc)
        logger.warning("Rejected malformed event body: %s", message)
        return JSONResponse(status_code=400, content={"error": message, "code": "BadRequest"})

    @app.post(
        server.path,
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    )
    def send_event(body: EventRequest) -> Any:
        responder = BufferedResponder()
        try:
            result = machine.send_event(body.action, body.param, responder=responder)
        except JsonFsmError as exc:
            status = status_for(exc)
            if status >= 500:
                logger.error("Event %r failed: %s", body.action, exc)
            else:
                logger.info("Event %r rejected: %s", body.action, exc)
            return JSONResponse(status_code=status, content=error_payload(exc))

        if responder.responded:
            return JSONResponse(status_code=responder.status, content=responder.payload)
        return {"status": "ok", "state": result.to_state}

    @app.get("/state", response_model=StateResponse)
    def current_state() -> Any:
        return machine.snapshot()

    @app.get("/health")
    def health() -> Any:
        return {"status": "ok"}

    return app


__all__ = ["create_app"]
