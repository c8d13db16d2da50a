"""
Shopify GraphQL clients.

- BaseShopifyGraphQLClient: query/mutate executor over aiohttp
- ShopifyBulkOperationClient: bulk executor built on a query executor
"""

from .base_client import BaseShopifyGraphQLClient
from .bulk_client import ShopifyBulkOperationClient
from .protocols import BulkExecutor, QueryExecutor

__all__ = [
    "BaseShopifyGraphQLClient",
    "BulkExecutor",
    "QueryExecutor",
    "ShopifyBulkOperationClient",
]
