"""
GraphQL documents for the Shopify Admin API.

Structure:
- builder: typed document builder
- core: queries shared across clients
- orders: order profiles and operation documents
- bulk: bulk operation management
"""

from .bulk import (
    BULK_OPERATION_STATUS_QUERY,
    CANCEL_BULK_OPERATION_MUTATION,
    CREATE_BULK_OPERATION_MUTATION,
)
from .core import SHOP_INFO_QUERY
from .orders import (
    LINE_ITEM_FULL_FRAGMENT,
    LINE_ITEM_LIGHT_FRAGMENT,
    ORDER_BY_ID_QUERY,
    ORDER_UPDATE_MUTATION,
    ORDERS_PAGE_QUERY,
    build_order_by_id_query,
    build_order_update_mutation,
    build_orders_bulk_query,
    build_orders_page_query,
)

__all__ = [
    # Core queries
    "SHOP_INFO_QUERY",
    # Order documents
    "LINE_ITEM_FULL_FRAGMENT",
    "LINE_ITEM_LIGHT_FRAGMENT",
    "ORDER_BY_ID_QUERY",
    "ORDERS_PAGE_QUERY",
    "ORDER_UPDATE_MUTATION",
    "build_order_by_id_query",
    "build_orders_bulk_query",
    "build_orders_page_query",
    "build_order_update_mutation",
    # Bulk operations
    "BULK_OPERATION_STATUS_QUERY",
    "CANCEL_BULK_OPERATION_MUTATION",
    "CREATE_BULK_OPERATION_MUTATION",
]
