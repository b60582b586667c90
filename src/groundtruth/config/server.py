"""Web server configuration values."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .errors import ConfigurationError

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000


@dataclass(frozen=True, slots=True)
class ServerConfig:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    is_production: bool = False


def get_server_config() -> ServerConfig:
    raw_port = os.getenv("PORT")
    try:
        port = int(raw_port) if raw_port else DEFAULT_PORT
    except ValueError as exc:
        raise ConfigurationError(f"Invalid PORT value: {raw_port}") from exc
    return ServerConfig(
        host=os.getenv("HOST") or DEFAULT_HOST,
        port=port,
        is_production=os.getenv("GROUNDTRUTH_ENV") == "production",
    )
