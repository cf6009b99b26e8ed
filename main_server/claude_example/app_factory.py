from __future__ import annotations

from contextlib import asynccontextmanager
from enum import Enum

from fastapi import FastAPI

from .log import log_event, get_logger
from .routers.index import register_routes
from .views import configure


class Phase(str, Enum):
    UNCONFIGURED = "UNCONFIGURED"
    CONFIGURED = "CONFIGURED"
    LISTENING = "LISTENING"
    TERMINATED = "TERMINATED"


def set_phase(app: FastAPI, phase: Phase) -> None:
    prev = getattr(app.state, "phase", Phase.UNCONFIGURED)
    app.state.phase = phase
    log_event("SERVER", "INFO", "PHASE", f"{prev.value} -> {phase.value}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger = get_logger()
    logger.warning("========== Claude Example boot ==========")
    log_event("SERVER", "INFO", "SERVER_START", "FastAPI server started")

    try:
        yield
    finally:
        log_event("SERVER", "INFO", "SERVER_STOP", "FastAPI server stopped")
        logger.warning("========== Claude Example stopped ==========")


def create_app() -> FastAPI:
    """
    Build routes + view engine only.
    Nothing here opens a socket; see runner.start() for that.
    """
    app = FastAPI(title="Claude Example", lifespan=lifespan)
    app.state.phase = Phase.UNCONFIGURED

    configure(app)
    register_routes(app)

    set_phase(app, Phase.CONFIGURED)
    return app
