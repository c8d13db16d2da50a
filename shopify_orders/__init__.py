"""
Order-data access layer for the Shopify Admin GraphQL API.

Exposes a single order service with fetch-by-id, bulk listing,
cursor-paginated listing and update operations.
"""

from shopify_orders.version import __version__

__all__ = ["__version__"]
