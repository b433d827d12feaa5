"""
Restaurant API - Store Gateway Unit Tests
==========================================

What:  Tests for RestaurantStore's connection-per-request scope.
How:   AsyncMongoClient is patched, so no server is contacted.

What we test:
    ✅ Client built from the settings object, with explicit timeouts
    ✅ Client closed on success and when the caller raises
    ✅ Default database and configured collection are selected
    ✅ ping() runs the admin ping command
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from pymongo.errors import OperationFailure

from restaurant_api.config import Settings
from restaurant_api.database import RestaurantStore


@pytest.fixture
def store_settings():
    return Settings(
        mongodb_uri="mongodb://db.internal:27017/food-delivery-app",
        mongodb_collection="restaurants",
        mongodb_timeout_ms=1500,
        mongodb_server_selection_timeout_ms=750,
    )


@pytest.fixture
def mock_client_cls():
    with patch("restaurant_api.database.AsyncMongoClient") as client_cls:
        client = client_cls.return_value
        client.close = AsyncMock()
        client.admin.command = AsyncMock(return_value={"ok": 1})
        yield client_cls


class TestConnectionScope:

    @pytest.mark.asyncio
    async def test_client_built_from_settings(self, store_settings, mock_client_cls):
        store = RestaurantStore(store_settings)

        async with store.connect():
            pass

        mock_client_cls.assert_called_once_with(
            "mongodb://db.internal:27017/food-delivery-app",
            timeoutMS=1500,
            serverSelectionTimeoutMS=750,
        )

    @pytest.mark.asyncio
    async def test_client_closed_on_success(self, store_settings, mock_client_cls):
        store = RestaurantStore(store_settings)

        async with store.collection():
            pass

        mock_client_cls.return_value.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_client_closed_when_operation_fails(self, store_settings, mock_client_cls):
        store = RestaurantStore(store_settings)

        with pytest.raises(OperationFailure):
            async with store.collection():
                raise OperationFailure("write failed")

        mock_client_cls.return_value.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_selects_configured_collection(self, store_settings, mock_client_cls):
        client = mock_client_cls.return_value
        database = MagicMock()
        client.get_default_database.return_value = database
        store = RestaurantStore(store_settings)

        async with store.collection() as collection:
            assert collection is database.__getitem__.return_value

        client.get_default_database.assert_called_once_with(default="food-delivery-app")
        database.__getitem__.assert_called_once_with("restaurants")

    @pytest.mark.asyncio
    async def test_each_scope_opens_its_own_client(self, store_settings, mock_client_cls):
        store = RestaurantStore(store_settings)

        async with store.collection():
            pass
        async with store.collection():
            pass

        assert mock_client_cls.call_count == 2


class TestPing:

    @pytest.mark.asyncio
    async def test_ping_runs_admin_command(self, store_settings, mock_client_cls):
        store = RestaurantStore(store_settings)

        await store.ping()

        client = mock_client_cls.return_value
        client.admin.command.assert_awaited_once_with("ping")
        client.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_ping_failure_propagates_after_close(self, store_settings, mock_client_cls):
        client = mock_client_cls.return_value
        client.admin.command = AsyncMock(side_effect=OperationFailure("unauthorized"))
        store = RestaurantStore(store_settings)

        with pytest.raises(OperationFailure):
            await store.ping()

        client.close.assert_awaited_once()
