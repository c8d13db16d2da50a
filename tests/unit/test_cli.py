"""Tests for the command line interface."""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from shopify_orders import cli
from shopify_orders.domain.models import LineItemProfile, ListOptions, Order, OrderInput, OrderPage
from shopify_orders.utils.error_handler import OrderOperationException, ShopifyAPIException


@pytest.fixture
def client():
    mock = MagicMock()
    mock.orders.get = AsyncMock()
    mock.orders.list = AsyncMock(return_value=[])
    mock.orders.list_all = AsyncMock(return_value=[])
    mock.orders.list_after_cursor = AsyncMock(return_value=OrderPage())
    mock.orders.update = AsyncMock(return_value=None)
    return mock


class TestParser:
    def test_first_and_last_are_exclusive(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["page", "--first", "5", "--last", "5"])

    def test_command_is_required(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args([])


class TestRunCommand:
    @pytest.mark.asyncio
    async def test_page(self, client):
        args = cli.build_parser().parse_args(["page", "--query", "tag:vip", "--first", "5", "--after", "c1"])

        await cli.run_command(client, args)

        client.orders.list_after_cursor.assert_awaited_once_with(ListOptions(query="tag:vip", first=5, after="c1"))

    @pytest.mark.asyncio
    async def test_list(self, client):
        args = cli.build_parser().parse_args(["list", "--query", "financial_status:paid"])

        await cli.run_command(client, args)

        client.orders.list.assert_awaited_once_with(ListOptions(query="financial_status:paid"))

    @pytest.mark.asyncio
    async def test_update_splits_tags(self, client):
        args = cli.build_parser().parse_args(["update", "gid://shopify/Order/1", "--tags", "vip, gift,"])

        result = await cli.run_command(client, args)

        assert result == {"updated": "gid://shopify/Order/1"}
        client.orders.update.assert_awaited_once_with(OrderInput(id="gid://shopify/Order/1", tags=["vip", "gift"]))


class TestToJson:
    def test_serializes_orders(self, full_order_node):
        order = Order.from_graphql(full_order_node, LineItemProfile.FULL)

        data = json.loads(cli.to_json([order]))

        assert data[0]["id"] == "gid://shopify/Order/1001"
        assert data[0]["created_at"] == "2025-01-15T10:30:00+00:00"
        assert data[0]["display_financial_status"] == "PAID"
        assert data[0]["line_items"][0]["original_unit_price"] == {"amount": "75.00", "currency": "USD"}

    def test_none(self):
        assert cli.to_json(None) == "null"


class TestMain:
    @pytest.mark.asyncio
    async def test_returns_one_on_app_exception(self, client):
        client.orders.get.side_effect = OrderOperationException("query", ShopifyAPIException("boom"))
        facade = MagicMock()
        facade.__aenter__ = AsyncMock(return_value=client)
        facade.__aexit__ = AsyncMock(return_value=False)

        with patch.object(cli, "ShopifyClient", return_value=facade), patch.object(cli, "setup_logging"):
            assert await cli.main(["get", "gid://shopify/Order/1"]) == 1

    @pytest.mark.asyncio
    async def test_prints_result(self, client, capsys):
        facade = MagicMock()
        facade.__aenter__ = AsyncMock(return_value=client)
        facade.__aexit__ = AsyncMock(return_value=False)

        with patch.object(cli, "ShopifyClient", return_value=facade), patch.object(cli, "setup_logging"):
            assert await cli.main(["list-all"]) == 0

        assert json.loads(capsys.readouterr().out) == []
