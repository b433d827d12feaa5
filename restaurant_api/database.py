"""
Restaurant API - Document Store Gateway
========================================

What:  Connection-per-request access to the MongoDB `restaurants` collection.
Why:   Centralizes all store connection logic in one place; routes and
       services never build clients themselves.
How:   RestaurantStore is built once from the settings object at startup.
       Each request opens its own AsyncMongoClient inside an async context
       manager, performs one operation, and the client is closed in a
       `finally` block whatever the outcome.
Who:   Used by RestaurantService and the health route via get_store().

Connection Lifecycle (per request):
    connecting ──▶ executing ──▶ responding ──▶ closed
         │              │
         └──── error ───┴──────────────────────▶ closed

    Validation failures are raised before connect() is entered, so they
    never open a connection.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict

from fastapi import Request
from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection

from restaurant_api.config import Settings

logger = logging.getLogger(__name__)


class RestaurantStore:
    """
    Gateway to the single restaurants collection.

    Holds only immutable connection parameters; no client survives a request,
    so instances are safe to share across concurrent requests.
    """

    def __init__(self, config: Settings):
        self.uri = config.mongodb_uri
        self.database_name = config.mongodb_database
        self.collection_name = config.mongodb_collection
        self.timeout_ms = config.mongodb_timeout_ms
        self.server_selection_timeout_ms = config.mongodb_server_selection_timeout_ms

    def _client_options(self) -> Dict[str, Any]:
        # timeoutMS bounds every operation on this client (connect, query, close)
        return {
            "timeoutMS": self.timeout_ms,
            "serverSelectionTimeoutMS": self.server_selection_timeout_ms,
        }

    @asynccontextmanager
    async def connect(self) -> AsyncGenerator[AsyncMongoClient, None]:
        """
        Open a client for the duration of one request.

        The client is closed on every exit path, including exceptions raised
        by the caller inside the `async with` block.
        """
        client: AsyncMongoClient = AsyncMongoClient(self.uri, **self._client_options())
        logger.debug("Opened connection to document store")
        try:
            yield client
        finally:
            await client.close()
            logger.debug("Closed connection to document store")

    @asynccontextmanager
    async def collection(self) -> AsyncGenerator[AsyncCollection, None]:
        """Yield the restaurants collection of the configured database."""
        async with self.connect() as client:
            db = client.get_default_database(default=self.database_name)
            yield db[self.collection_name]

    async def ping(self) -> None:
        """Round-trip a `ping` command; raises PyMongoError when unreachable."""
        async with self.connect() as client:
            await client.admin.command("ping")


def get_store(request: Request) -> RestaurantStore:
    """
    FastAPI dependency returning the store built by the app factory.

    Overridden in tests with an in-memory double.
    """
    return request.app.state.store
