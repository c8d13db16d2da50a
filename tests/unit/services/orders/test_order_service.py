"""Tests for the order service: routing, error tagging and result shapes."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from shopify_orders.db.queries import ORDER_BY_ID_QUERY, ORDER_UPDATE_MUTATION, ORDERS_PAGE_QUERY
from shopify_orders.domain.models import LineItemProfile, ListOptions, OrderInput
from shopify_orders.services.orders import ShopifyOrderService
from shopify_orders.utils.error_handler import (
    BulkOperationException,
    OrderOperationException,
    OrderUserErrorsException,
    ShopifyAPIException,
)


@pytest.fixture
def executor():
    mock = MagicMock()
    mock.query = AsyncMock()
    mock.mutate = AsyncMock()
    return mock


@pytest.fixture
def bulk_executor():
    mock = MagicMock()
    mock.bulk_query = AsyncMock(return_value=[])
    return mock


@pytest.fixture
def service(executor, bulk_executor):
    return ShopifyOrderService(executor, bulk_executor)


class TestGet:
    """Single order lookup."""

    @pytest.mark.asyncio
    async def test_returns_order_with_matching_id(self, service, executor, full_order_node):
        executor.query.return_value = {"node": full_order_node}

        order = await service.get("gid://shopify/Order/1001")

        assert order is not None
        assert order.id == "gid://shopify/Order/1001"
        assert order.line_items[0].profile is LineItemProfile.FULL
        executor.query.assert_awaited_once_with(ORDER_BY_ID_QUERY, {"id": "gid://shopify/Order/1001"})

    @pytest.mark.asyncio
    async def test_missing_order_is_none_not_an_error(self, service, executor):
        executor.query.return_value = {"node": None}

        assert await service.get("gid://shopify/Order/404") is None

    @pytest.mark.asyncio
    async def test_executor_failure_is_tagged_query(self, service, executor):
        cause = ShopifyAPIException("GraphQL errors: access denied")
        executor.query.side_effect = cause

        with pytest.raises(OrderOperationException) as exc_info:
            await service.get("gid://shopify/Order/1")

        assert str(exc_info.value) == "query: GraphQL errors: access denied"
        assert exc_info.value.operation_kind == "query"
        assert exc_info.value.__cause__ is cause

    @pytest.mark.asyncio
    async def test_cancellation_is_not_wrapped(self, service, executor):
        executor.query.side_effect = asyncio.CancelledError()

        with pytest.raises(asyncio.CancelledError):
            await service.get("gid://shopify/Order/1")


class TestBulkListing:
    """list / list_all always go through the bulk executor."""

    @pytest.mark.asyncio
    async def test_list_sends_filter_to_bulk_executor(self, service, executor, bulk_executor, full_order_node):
        bulk_executor.bulk_query.return_value = [full_order_node]

        orders = await service.list(ListOptions(query="financial_status:paid", first=5, after="ignored"))

        assert [o.id for o in orders] == ["gid://shopify/Order/1001"]
        document = bulk_executor.bulk_query.await_args.args[0]
        assert 'orders(query: "financial_status:paid")' in document
        assert "ignored" not in document
        executor.query.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_list_all_uses_empty_filter(self, service, bulk_executor):
        orders = await service.list_all()

        assert orders == []
        document = bulk_executor.bulk_query.await_args.args[0]
        assert 'orders(query: "")' in document

    @pytest.mark.asyncio
    async def test_list_preserves_export_order(self, service, bulk_executor, full_order_node):
        records = []
        for number in (3, 1, 2):
            record = dict(full_order_node)
            record["id"] = f"gid://shopify/Order/{number}"
            records.append(record)
        bulk_executor.bulk_query.return_value = records

        orders = await service.list(ListOptions())

        assert [o.id for o in orders] == [
            "gid://shopify/Order/3",
            "gid://shopify/Order/1",
            "gid://shopify/Order/2",
        ]

    @pytest.mark.asyncio
    async def test_bulk_failure_is_tagged_bulk_query(self, service, bulk_executor):
        bulk_executor.bulk_query.side_effect = BulkOperationException("Bulk operation finished with status FAILED")

        with pytest.raises(OrderOperationException) as exc_info:
            await service.list_all()

        assert str(exc_info.value).startswith("bulk query: ")
        assert "FAILED" in str(exc_info.value)


class TestListAfterCursor:
    """One interactive page."""

    @pytest.mark.asyncio
    async def test_page_cursors_and_order(self, service, executor, orders_page_response):
        executor.query.return_value = orders_page_response

        page = await service.list_after_cursor(ListOptions(first=3))

        assert [o.legacy_resource_id for o in page.orders] == ["3001", "3002", "3003"]
        assert page.first_cursor == "cursor-a"
        assert page.last_cursor == "cursor-c"
        assert page.has_next_page is True
        assert all(o.line_items[0].profile is LineItemProfile.LIGHT for o in page.orders)

    @pytest.mark.asyncio
    async def test_variables_follow_precedence(self, service, executor):
        executor.query.return_value = {"orders": {"edges": [], "pageInfo": {"hasNextPage": False}}}

        await service.list_after_cursor(
            ListOptions(query="tag:vip", first=10, last=4, after="next", before="prev", reverse=True)
        )

        document, variables = executor.query.await_args.args
        assert document == ORDERS_PAGE_QUERY
        assert variables == {"query": "tag:vip", "reverse": True, "after": "next", "first": 10}

    @pytest.mark.asyncio
    async def test_empty_page_is_not_an_error(self, service, executor):
        executor.query.return_value = {"orders": {"edges": [], "pageInfo": {"hasNextPage": False}}}

        page = await service.list_after_cursor(ListOptions(first=0))

        assert page.orders == []
        assert page.first_cursor is None
        assert page.last_cursor is None
        assert page.has_next_page is False

    @pytest.mark.asyncio
    async def test_executor_failure_is_tagged_query(self, service, executor):
        executor.query.side_effect = ShopifyAPIException("Network error: timeout")

        with pytest.raises(OrderOperationException, match=r"^query: Network error: timeout$"):
            await service.list_after_cursor(ListOptions(first=10))


class TestUpdate:
    """orderUpdate mutation."""

    @pytest.mark.asyncio
    async def test_success_returns_none(self, service, executor):
        executor.mutate.return_value = {"orderUpdate": {"order": {"id": "gid://shopify/Order/1"}, "userErrors": []}}

        result = await service.update(OrderInput(id="gid://shopify/Order/1", note="Gift"))

        assert result is None
        executor.mutate.assert_awaited_once_with(
            ORDER_UPDATE_MUTATION, {"input": {"id": "gid://shopify/Order/1", "note": "Gift"}}
        )

    @pytest.mark.asyncio
    async def test_two_user_errors_become_one_exception(self, service, executor):
        executor.mutate.return_value = {
            "orderUpdate": {
                "order": None,
                "userErrors": [
                    {"field": ["email"], "message": "Email is invalid"},
                    {"field": ["shippingAddress", "zip"], "message": "Zip is not valid for Texas"},
                ],
            }
        }

        with pytest.raises(OrderUserErrorsException) as exc_info:
            await service.update(OrderInput(id="gid://shopify/Order/1", email="nope"))

        error = exc_info.value
        assert len(error.user_errors) == 2
        assert "email: Email is invalid" in str(error)
        assert "shippingAddress.zip: Zip is not valid for Texas" in str(error)

    @pytest.mark.asyncio
    async def test_executor_failure_is_tagged_mutation(self, service, executor):
        executor.mutate.side_effect = ShopifyAPIException("HTTP 503 from Shopify")

        with pytest.raises(OrderOperationException, match=r"^mutation: HTTP 503 from Shopify$"):
            await service.update(OrderInput(id="gid://shopify/Order/1"))


class TestConcurrency:
    """Calls share no mutable state in the service."""

    @pytest.mark.asyncio
    async def test_concurrent_get_and_update_do_not_interfere(self, service, executor, full_order_node):
        async def query(document, variables):
            await asyncio.sleep(0)
            node = dict(full_order_node)
            node["id"] = variables["id"]
            return {"node": node}

        async def mutate(document, variables):
            await asyncio.sleep(0)
            return {"orderUpdate": {"userErrors": []}}

        executor.query.side_effect = query
        executor.mutate.side_effect = mutate

        results = await asyncio.gather(
            service.get("gid://shopify/Order/1"),
            service.update(OrderInput(id="gid://shopify/Order/2", note="a")),
            service.get("gid://shopify/Order/3"),
            service.update(OrderInput(id="gid://shopify/Order/4", note="b")),
        )

        assert results[0].id == "gid://shopify/Order/1"
        assert results[1] is None
        assert results[2].id == "gid://shopify/Order/3"
        assert results[3] is None
        sent_inputs = [call.args[1]["input"]["id"] for call in executor.mutate.await_args_list]
        assert sorted(sent_inputs) == ["gid://shopify/Order/2", "gid://shopify/Order/4"]
