"""
Order GraphQL documents.

Two field profiles are defined:
- full: addresses, transactions and priced line items, used for single
  order lookups and bulk exports
- light: summary fields and fulfillment-oriented line items, used for
  interactive cursor pagination where payload size matters

Each profile has its own line item fragment with a distinct name, so a
document can never declare the same fragment name twice.
"""

from shopify_orders.db.queries.builder import (
    Fragment,
    Operation,
    VariableDefinition,
    connection,
    fields,
    on,
    render,
    select,
    spread,
    var,
)

# Shopify's maximum page size for nested connections
LINE_ITEMS_FULL_PAGE_SIZE = 250
# Nested line items per order on paginated listings
LINE_ITEMS_LIGHT_PAGE_SIZE = 25

_MONEY = select("shopMoney", *fields("amount", "currencyCode"))

LINE_ITEM_FULL_FRAGMENT = Fragment(
    name="LineItemFull",
    type_condition="LineItem",
    selections=(
        *fields("id"),
        select("product", *fields("legacyResourceId")),
        *fields("name", "sku", "quantity"),
        select("originalUnitPriceSet", _MONEY),
        select("discountedUnitPriceSet", _MONEY),
    ),
)

LINE_ITEM_LIGHT_FRAGMENT = Fragment(
    name="LineItemLight",
    type_condition="LineItem",
    selections=fields(
        "id",
        "sku",
        "quantity",
        "fulfillableQuantity",
        "fulfillmentStatus",
        "vendor",
        "title",
        "variantTitle",
    ),
)

_FULL_ADDRESS = fields(
    "name",
    "company",
    "address1",
    "address2",
    "city",
    "zip",
    "provinceCode",
    "countryCodeV2",
    "phone",
)

ORDER_FULL_FIELDS = (
    *fields(
        "id",
        "legacyResourceId",
        "name",
        "createdAt",
        "processedAt",
        "email",
        "displayFinancialStatus",
        "displayFulfillmentStatus",
    ),
    select("customer", *fields("id", "legacyResourceId")),
    select("billingAddress", *_FULL_ADDRESS),
    select("shippingAddress", *_FULL_ADDRESS),
    select("transactions", *fields("gateway", "paymentId")),
    *fields("tags"),
)

ORDER_LIGHT_FIELDS = (
    *fields("id", "legacyResourceId", "name", "createdAt"),
    select("customer", *fields("id", "legacyResourceId", "firstName", "displayName", "email")),
    select("shippingAddress", *fields("address1", "address2", "city", "province", "country", "zip")),
    select("shippingLine", *fields("title")),
    select("totalReceivedSet", select("shopMoney", *fields("amount"))),
    *fields("note", "tags"),
)


def build_order_by_id_query() -> str:
    """
    Single order lookup through ``node(id:)`` with the full profile.

    Variables: ``$id: ID!``. The response shape is ``{"node": {...} | null}``.
    """
    operation = Operation(
        kind="query",
        name="order",
        variables=(VariableDefinition("id", "ID!"),),
        selections=(
            select(
                "node",
                on(
                    "Order",
                    *ORDER_FULL_FIELDS,
                    connection(
                        "lineItems",
                        (spread(LINE_ITEM_FULL_FRAGMENT),),
                        first=LINE_ITEMS_FULL_PAGE_SIZE,
                    ),
                ),
                id=var("id"),
            ),
        ),
    )
    return render(operation)


def build_orders_bulk_query(query: str = "") -> str:
    """
    Unbounded order connection with the full profile, for a bulk export.

    Bulk documents take no variables, so the filter is rendered inline as an
    escaped string literal. Its syntax is not validated.

    Args:
        query: Shopify search expression; empty selects every order
    """
    operation = Operation(
        kind="query",
        selections=(
            connection(
                "orders",
                (
                    *ORDER_FULL_FIELDS,
                    connection("lineItems", (spread(LINE_ITEM_FULL_FRAGMENT),)),
                ),
                query=query,
            ),
        ),
    )
    return render(operation)


def build_orders_page_query() -> str:
    """
    One page of orders with the light profile and edge cursors.

    Variables: ``$query``, ``$first``, ``$last``, ``$before``, ``$after``,
    ``$reverse``. Variables left out of the request are null on the server.
    """
    operation = Operation(
        kind="query",
        name="orders",
        variables=(
            VariableDefinition("query", "String"),
            VariableDefinition("first", "Int"),
            VariableDefinition("last", "Int"),
            VariableDefinition("before", "String"),
            VariableDefinition("after", "String"),
            VariableDefinition("reverse", "Boolean"),
        ),
        selections=(
            connection(
                "orders",
                (
                    *ORDER_LIGHT_FIELDS,
                    connection(
                        "lineItems",
                        (spread(LINE_ITEM_LIGHT_FRAGMENT),),
                        first=LINE_ITEMS_LIGHT_PAGE_SIZE,
                    ),
                ),
                with_cursor=True,
                page_info=("hasNextPage",),
                query=var("query"),
                first=var("first"),
                last=var("last"),
                before=var("before"),
                after=var("after"),
                reverse=var("reverse"),
            ),
        ),
    )
    return render(operation)


def build_order_update_mutation() -> str:
    """
    ``orderUpdate`` mutation taking the whole input as ``$input: OrderInput!``.
    """
    operation = Operation(
        kind="mutation",
        name="orderUpdate",
        variables=(VariableDefinition("input", "OrderInput!"),),
        selections=(
            select(
                "orderUpdate",
                select("order", *fields("id")),
                select("userErrors", *fields("field", "message")),
                input=var("input"),
            ),
        ),
    )
    return render(operation)


ORDER_BY_ID_QUERY = build_order_by_id_query()
ORDERS_PAGE_QUERY = build_orders_page_query()
ORDER_UPDATE_MUTATION = build_order_update_mutation()
