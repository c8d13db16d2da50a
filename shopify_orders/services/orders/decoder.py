"""
Decoding of order responses into domain records.

Connections are flattened in a single pass, keeping the server's order and
without deduplication.
"""

from typing import Any, Iterable

from shopify_orders.domain.models import LineItemProfile, Order, OrderPage


def decode_order_node(node: dict[str, Any] | None, profile: LineItemProfile = LineItemProfile.FULL) -> Order | None:
    """
    Decode a single-node lookup.

    An absent node means the order does not exist and decodes to None.
    """
    if not node:
        return None
    return Order.from_graphql(node, profile)


def decode_order_nodes(nodes: Iterable[dict[str, Any]], profile: LineItemProfile = LineItemProfile.FULL) -> list[Order]:
    """Decode already-flattened order nodes, such as bulk export records."""
    return [Order.from_graphql(node, profile) for node in nodes]


def decode_order_connection(
    connection: dict[str, Any] | None, profile: LineItemProfile = LineItemProfile.FULL
) -> list[Order]:
    """Flatten ``{"edges": [{"node": ...}]}`` into orders, one per edge, in order."""
    edges = (connection or {}).get("edges") or []
    return [Order.from_graphql(edge["node"], profile) for edge in edges]


def decode_order_page(connection: dict[str, Any] | None, profile: LineItemProfile = LineItemProfile.LIGHT) -> OrderPage:
    """
    Decode one cursor-paginated page.

    The first and last cursors are those of the first and last edge; both
    are None for an empty page.
    """
    connection = connection or {}
    edges = connection.get("edges") or []
    has_next_page = bool((connection.get("pageInfo") or {}).get("hasNextPage", False))

    if not edges:
        return OrderPage(orders=[], first_cursor=None, last_cursor=None, has_next_page=has_next_page)

    return OrderPage(
        orders=decode_order_connection(connection, profile),
        first_cursor=edges[0].get("cursor"),
        last_cursor=edges[-1].get("cursor"),
        has_next_page=has_next_page,
    )
