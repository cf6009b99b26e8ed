from __future__ import annotations

"""
Process entry: the only place that opens a network socket.

  PORT=3000 python -m claude_example.runner
"""

import socket
import sys

import uvicorn
from fastapi import FastAPI

from .app_factory import Phase, create_app, set_phase
from .config import DEFAULT_HOST, DEFAULT_LOG_LEVEL, ServerConfig
from .errors import ListenFailure
from .log import get_logger, log_event, set_level

LISTEN_BACKLOG = 2048


def bind_listener(host: str, port: int) -> socket.socket:
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    sock = socket.socket(family, socket.SOCK_STREAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((host, port))
        sock.listen(LISTEN_BACKLOG)
        sock.set_inheritable(True)
    except OSError as e:
        # never hand back a half-bound socket
        sock.close()
        raise ListenFailure(host, port, e) from e
    return sock


def start(
    app: FastAPI,
    port: int,
    host: str = DEFAULT_HOST,
    log_level: str = DEFAULT_LOG_LEVEL,
) -> None:
    """
    Bind, then serve until the process is told to stop.
    Raises ListenFailure if the bind fails; there is no retry and no fallback port.
    """
    # uvicorn.Config rejects a bad log level, so build it before owning a socket
    config = uvicorn.Config(app, host=host, port=port, log_level=log_level)

    sock = bind_listener(host, port)
    bound_port = sock.getsockname()[1]
    config.port = bound_port
    server = uvicorn.Server(config)

    set_phase(app, Phase.LISTENING)
    get_logger().warning("Server is running on http://localhost:%d", bound_port)
    try:
        server.run(sockets=[sock])
    finally:
        sock.close()
        set_phase(app, Phase.TERMINATED)


def main() -> int:
    config = ServerConfig.from_env()
    set_level(config.log_level)

    app = create_app()
    try:
        start(app, config.port, host=config.host, log_level=config.log_level)
    except ListenFailure as e:
        log_event("SERVER", "ERROR", "LISTEN_FAIL", f"Server failed to start: {e!r} (cause: {e.cause!r})")
        sys.exit(1)
    return 0


if __name__ == "__main__":
    sys.exit(main())
