"""Dataclass-based domain configuration pattern.

Each vertical defines its connection settings, server binding and feature
switches as a frozen dataclass. This gives you:
- Type safety (IDE autocompletion, mypy checking)
- Default values (sensible out-of-the-box)
- Immutability (frozen=True prevents accidental mutation)
- Easy overrides (from env vars)

Example domain: a bookstore backed by MongoDB.
"""

import os
from dataclasses import dataclass, field
from enum import Enum


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class SeedMode(str, Enum):
    IF_EMPTY = "if_empty"
    ALWAYS = "always"
    OFF = "off"


# ---------------------------------------------------------------------------
# Nested config sections
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DatabaseConfig:
    """Document store connection settings."""

    mongo_url: str = "mongodb://localhost:27017/bookstore"
    server_selection_timeout_ms: int = 30000


@dataclass(frozen=True)
class ServerConfig:
    """HTTP binding."""

    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"


# ---------------------------------------------------------------------------
# Top-level domain config
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BookstoreConfig:
    """Complete configuration for the bookstore vertical.

    Usage::

        config = BookstoreConfig.from_env()
        uvicorn.run(app, host=config.server.host, port=config.server.port)
    """

    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    seed_mode: SeedMode = SeedMode.IF_EMPTY

    @classmethod
    def default(cls) -> "BookstoreConfig":
        """Create config with all defaults."""
        return cls()

    @classmethod
    def from_env(cls, prefix: str = "BOOKSTORE_") -> "BookstoreConfig":
        """Create config from environment variables.

        Example: BOOKSTORE_PORT=8080 BOOKSTORE_SEED_MODE=always

        Raises ValueError on an unknown seed mode or a non-integer port.
        """
        db_overrides = {}
        mongo_url = os.getenv(f"{prefix}MONGO_URL")
        if mongo_url:
            db_overrides["mongo_url"] = mongo_url
        timeout = os.getenv(f"{prefix}SERVER_SELECTION_TIMEOUT_MS")
        if timeout:
            db_overrides["server_selection_timeout_ms"] = int(timeout)

        server_overrides = {}
        host = os.getenv(f"{prefix}HOST")
        if host:
            server_overrides["host"] = host
        port = os.getenv(f"{prefix}PORT")
        if port:
            server_overrides["port"] = int(port)
        log_level = os.getenv(f"{prefix}LOG_LEVEL")
        if log_level:
            server_overrides["log_level"] = log_level.upper()

        overrides = {}
        seed_mode = os.getenv(f"{prefix}SEED_MODE")
        if seed_mode:
            overrides["seed_mode"] = SeedMode(seed_mode.lower())

        return cls(
            database=DatabaseConfig(**db_overrides),
            server=ServerConfig(**server_overrides),
            **overrides,
        )
