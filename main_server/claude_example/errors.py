from __future__ import annotations


class ListenFailure(Exception):
    """The listener could not bind to the configured address."""

    def __init__(self, host: str, port: int, cause: BaseException) -> None:
        self.host = host
        self.port = port
        self.cause = cause
        super().__init__(f"cannot listen on {host}:{port}: {cause}")
