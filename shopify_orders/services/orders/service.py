"""
Order service.

Single entry point for reading and updating Shopify orders. Each operation
is routed to one executor:

- ``get`` and ``list_after_cursor``: one synchronous GraphQL query
- ``list`` and ``list_all``: a bulk export, awaited until fully materialized
- ``update``: one GraphQL mutation

The service keeps no state between calls. Executor failures are re-raised
as ``OrderOperationException`` tagged with the operation kind; nothing is
retried here.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Optional

from shopify_orders.db.queries import (
    ORDER_BY_ID_QUERY,
    ORDER_UPDATE_MUTATION,
    ORDERS_PAGE_QUERY,
    build_orders_bulk_query,
)
from shopify_orders.db.shopify_clients.protocols import BulkExecutor, QueryExecutor
from shopify_orders.domain.models import LineItemProfile, ListOptions, Order, OrderInput, OrderPage
from shopify_orders.utils.error_handler import OrderOperationException

from .decoder import decode_order_node, decode_order_nodes, decode_order_page
from .mutation import build_update_variables, raise_for_user_errors
from .pagination import build_page_variables
from .strategy import OrderOperation, strategy_for

logger = logging.getLogger(__name__)


class OrderService(ABC):
    """Order access operations."""

    @abstractmethod
    async def get(self, order_id: str) -> Optional[Order]:
        """Fetch one order by GID; None when it does not exist."""

    @abstractmethod
    async def list(self, options: ListOptions) -> list[Order]:
        """Every order matching ``options.query``."""

    @abstractmethod
    async def list_all(self) -> list[Order]:
        """Every order in the shop."""

    @abstractmethod
    async def list_after_cursor(self, options: ListOptions) -> OrderPage:
        """One page of orders plus its boundary cursors."""

    @abstractmethod
    async def update(self, order_input: OrderInput) -> None:
        """Apply ``order_input`` to the order it identifies."""


class ShopifyOrderService(OrderService):
    """
    Order service backed by a query executor and a bulk executor.

    Safe for concurrent use as long as the executors are.
    """

    def __init__(self, executor: QueryExecutor, bulk_executor: BulkExecutor):
        self.executor = executor
        self.bulk_executor = bulk_executor

    async def get(self, order_id: str) -> Optional[Order]:
        """
        Fetch one order with the full field profile.

        Args:
            order_id: Order GID (``gid://shopify/Order/...``)

        Returns:
            Order, or None if no order has this ID

        Raises:
            OrderOperationException: If the query fails ("query: ...")
        """
        strategy = strategy_for(OrderOperation.GET)
        try:
            result = await self.executor.query(ORDER_BY_ID_QUERY, {"id": order_id})
        except Exception as e:
            raise OrderOperationException(strategy.operation_kind, e) from e

        order = decode_order_node(result.get("node"), LineItemProfile.FULL)
        if order is None:
            logger.debug(f"Order not found: {order_id}")
        return order

    async def list(self, options: ListOptions) -> list[Order]:
        """
        Export every order matching ``options.query`` through a bulk operation.

        Count and cursor fields of ``options`` are ignored: a bulk export has
        no page size.

        Raises:
            OrderOperationException: If the bulk export fails ("bulk query: ...")
        """
        return await self._bulk_list(OrderOperation.LIST, options.query)

    async def list_all(self) -> list[Order]:
        """
        Export every order through a bulk operation.

        Raises:
            OrderOperationException: If the bulk export fails ("bulk query: ...")
        """
        return await self._bulk_list(OrderOperation.LIST_ALL, "")

    async def _bulk_list(self, operation: OrderOperation, query: str) -> list[Order]:
        strategy = strategy_for(operation)
        document = build_orders_bulk_query(query)

        logger.info(f"Exporting orders in bulk (filter: {query!r})")
        try:
            records = await self.bulk_executor.bulk_query(document)
        except Exception as e:
            raise OrderOperationException(strategy.operation_kind, e) from e

        return decode_order_nodes(records, LineItemProfile.FULL)

    async def list_after_cursor(self, options: ListOptions) -> OrderPage:
        """
        Fetch one page of orders with the light field profile.

        An empty page is a normal result: stop iterating when the page is
        empty or ``has_next_page`` is False.

        Args:
            options: Filter, count, cursor and sort direction

        Returns:
            OrderPage: Orders in server order plus first/last cursors

        Raises:
            OrderOperationException: If the query fails ("query: ...")
        """
        strategy = strategy_for(OrderOperation.LIST_AFTER_CURSOR)
        variables = build_page_variables(options)
        try:
            result = await self.executor.query(ORDERS_PAGE_QUERY, variables)
        except Exception as e:
            raise OrderOperationException(strategy.operation_kind, e) from e

        page = decode_order_page(result.get("orders"), LineItemProfile.LIGHT)
        logger.debug(f"Fetched order page: {len(page.orders)} orders, has_next_page={page.has_next_page}")
        return page

    async def update(self, order_input: OrderInput) -> None:
        """
        Send an ``orderUpdate`` mutation.

        Raises:
            OrderOperationException: If the mutation request fails ("mutation: ...")
            OrderUserErrorsException: If Shopify reports validation errors,
                all of them carried by this one exception
        """
        strategy = strategy_for(OrderOperation.UPDATE)
        try:
            result = await self.executor.mutate(ORDER_UPDATE_MUTATION, build_update_variables(order_input))
        except Exception as e:
            raise OrderOperationException(strategy.operation_kind, e) from e

        raise_for_user_errors(result, "orderUpdate")
        logger.info(f"Updated order {order_input.id}")
