"""Run the HTTP ingress with uvicorn."""
from __future__ import annotations

import logging
from typing import Any, Mapping

import uvicorn

from jsonfsm.core.config.domains import LoggingConfig, ServerConfig
from jsonfsm.core.state.engine import StateMachine

from .app import create_app

logger = logging.getLogger(__name__)


def serve(machine: StateMachine, settings: Mapping[str, Any]) -> None:
    """Serve ``machine`` until the process is stopped. Blocks."""
    server = ServerConfig(settings)
    app = create_app(machine, settings)
    logger.info(
        "Listening on http://%s:%d%s (machine %s, state %s)",
        server.host,
        server.port,
        server.path,
        machine.name,
        machine.snapshot()["state"],
    )
    uvicorn.run(
        app,
        host=server.host,
        port=server.port,
        log_level=LoggingConfig(settings).level.lower(),
        # Keep the root logging configuration installed by the CLI.
        log_config=None,
    )


__all__ = ["serve"]
