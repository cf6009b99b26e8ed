from __future__ import annotations

import os
from typing import Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

# ===== SERVER CONFIG =====
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000
DEFAULT_LOG_LEVEL = "info"

# names uvicorn accepts for --log-level
LogLevel = Literal["critical", "error", "warning", "info", "debug", "trace"]


class ServerConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    host: str = DEFAULT_HOST
    port: int = Field(DEFAULT_PORT, ge=1, le=65535)
    log_level: LogLevel = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ServerConfig":
        """
        Read once at startup:
          PORT      -> port the listener binds to
          HOST      -> bind address (all interfaces by default)
          LOG_LEVEL -> uvicorn + app logger level
        Empty values fall back to the defaults.
        """
        env = os.environ if environ is None else environ

        values = {}
        port = (env.get("PORT") or "").strip()
        if port:
            values["port"] = port
        host = (env.get("HOST") or "").strip()
        if host:
            values["host"] = host
        log_level = (env.get("LOG_LEVEL") or "").strip()
        if log_level:
            values["log_level"] = log_level.lower()

        return cls(**values)
