"""Async MongoDB client and database handle management.

Provides the single long-lived document store handle for the process:
- connect_db() opens the client once at startup and verifies it with a ping
- get_database() exposes the handle to FastAPI routes via dependency injection
- close_db() releases the client on shutdown

The driver pools connections internally; one client is shared by every
request.
"""

import logging
from dataclasses import dataclass

from fastapi import Request
from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from patterns.domain_config import DatabaseConfig

logger = logging.getLogger(__name__)


class DatabaseNotInitialized(RuntimeError):
    """Raised when a route runs without a usable database handle."""


@dataclass
class Connection:
    """Client plus the default database named in the connection string.

    ``verified`` is False when the startup ping failed; the handle is kept
    so that handlers surface store errors per request. Client and database
    are None when the client could not even be built (bad URI, failed SRV
    lookup).
    """

    client: AsyncMongoClient | None
    database: AsyncDatabase | None
    verified: bool = False
    error: str | None = None


# ---------------------------------------------------------------------------
# Lifecycle hooks
# ---------------------------------------------------------------------------

async def connect_db(config: DatabaseConfig) -> Connection:
    """Open the client and ping the server.

    Connection failures are logged and recorded on the returned
    ``Connection`` instead of raised.
    """
    connection = Connection(client=None, database=None)
    try:
        connection.client = AsyncMongoClient(
            config.mongo_url,
            serverSelectionTimeoutMS=config.server_selection_timeout_ms,
        )
        connection.database = connection.client.get_default_database(default="bookstore")
        await connection.database.command("ping")
    except PyMongoError as exc:
        logger.error("Error connecting to the database: %s", exc)
        connection.error = str(exc)
        return connection

    connection.verified = True
    logger.info("Connected to MongoDB database %r", connection.database.name)
    return connection


async def close_db(connection: Connection) -> None:
    """Close the client on shutdown, if one was built."""
    if connection.client is not None:
        await connection.client.close()


# ---------------------------------------------------------------------------
# FastAPI dependency
# ---------------------------------------------------------------------------

def get_database(request: Request) -> AsyncDatabase:
    """Return the database handle attached to the app during startup.

    Usage in FastAPI routes::

        @router.get("/items")
        async def list_items(db: AsyncDatabase = Depends(get_database)):
            return await db["items"].find().to_list()
    """
    database = getattr(request.app.state, "database", None)
    if database is None:
        raise DatabaseNotInitialized("Database connection is not available")
    return database
