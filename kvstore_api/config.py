"""Configuration for the Tarantool connection and the HTTP server."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

log = logging.getLogger(__name__)

DEFAULT_TT_HOST = "localhost"
DEFAULT_TT_PORT = "3301"
DEFAULT_SERVER_PORT = "8080"

ENV_TT_HOST = "TARANTOOL_HOST"
ENV_TT_PORT = "TARANTOOL_PORT"
ENV_SERVER_PORT = "SERVER_PORT"


@dataclass
class TTStoreConfig:
    """Where the Tarantool instance listens."""

    host: str = DEFAULT_TT_HOST
    port: str = DEFAULT_TT_PORT

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"


@dataclass
class ServerConfig:
    """Port the HTTP server binds to."""

    port: str = DEFAULT_SERVER_PORT


@dataclass
class Config:
    """Full application configuration."""

    tt: TTStoreConfig = field(default_factory=TTStoreConfig)
    server: ServerConfig = field(default_factory=ServerConfig)


def new_tt_store_config(host: str | None = None, port: str | None = None) -> TTStoreConfig:
    """Build the Tarantool config from the environment, then apply explicit overrides."""
    env_host = os.environ.get(ENV_TT_HOST, "")
    env_port = os.environ.get(ENV_TT_PORT, "")
    if not env_host:
        log.info("loading default host for tarantool")
        env_host = DEFAULT_TT_HOST
    if not env_port:
        log.info("loading default port for tarantool")
        env_port = DEFAULT_TT_PORT

    cfg = TTStoreConfig(host=env_host, port=env_port)
    if host is not None:
        cfg.host = host
    if port is not None:
        cfg.port = port
    return cfg


def new_server_config(port: str | None = None) -> ServerConfig:
    """Build the server config from the environment, then apply an explicit override."""
    env_port = os.environ.get(ENV_SERVER_PORT, "")
    if not env_port:
        log.info("loading default port")
        env_port = DEFAULT_SERVER_PORT

    cfg = ServerConfig(port=env_port)
    if port is not None:
        cfg.port = port
    return cfg


def load() -> Config:
    """Load the whole configuration from the environment."""
    return Config(tt=new_tt_store_config(), server=new_server_config())