"""
Shopify client facade.

Owns one GraphQL transport and one bulk client and exposes the order
service as ``client.orders``.
"""

import logging
from typing import Optional

from shopify_orders.core.config import Settings, get_settings
from shopify_orders.db.shopify_clients import BaseShopifyGraphQLClient, ShopifyBulkOperationClient
from shopify_orders.services.orders import ShopifyOrderService

logger = logging.getLogger(__name__)


class ShopifyClient:
    """
    Entry point wiring transport, bulk client and order service together.

    Example:
        async with ShopifyClient() as client:
            order = await client.orders.get("gid://shopify/Order/1")
    """

    def __init__(self, settings: Optional[Settings] = None, gql: Optional[BaseShopifyGraphQLClient] = None):
        """
        Initialize the client.

        Args:
            settings: Settings to use (defaults to the cached settings)
            gql: Pre-built transport (defaults to a new BaseShopifyGraphQLClient)
        """
        self.settings = settings or get_settings()
        self.gql = gql or BaseShopifyGraphQLClient(self.settings)
        self.bulk_operations = ShopifyBulkOperationClient(
            self.gql,
            poll_interval=self.settings.BULK_POLL_INTERVAL_SECONDS,
            max_poll_interval=self.settings.BULK_POLL_MAX_INTERVAL_SECONDS,
            timeout_seconds=self.settings.BULK_TIMEOUT_MINUTES * 60,
        )
        self.orders = ShopifyOrderService(self.gql, self.bulk_operations)

    async def initialize(self, verify: bool = True):
        """Open the transport session."""
        await self.gql.initialize(verify=verify)

    async def close(self):
        """Close the transport session."""
        await self.gql.close()

    async def __aenter__(self):
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    def __repr__(self):
        return f"ShopifyClient(shop={self.gql.shop_url}, api_version={self.gql.api_version})"
