"""
Order domain model.

Orders are decoded once from a GraphQL response and never mutated locally:
changes are sent to Shopify and a fresh read is needed to observe them.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from shopify_orders.domain.value_objects.money import Money

from .line_item import LineItem, LineItemProfile


class FinancialStatus(str, Enum):
    """Values of ``Order.displayFinancialStatus``."""

    AUTHORIZED = "AUTHORIZED"
    EXPIRED = "EXPIRED"
    PAID = "PAID"
    PARTIALLY_PAID = "PARTIALLY_PAID"
    PARTIALLY_REFUNDED = "PARTIALLY_REFUNDED"
    PENDING = "PENDING"
    REFUNDED = "REFUNDED"
    VOIDED = "VOIDED"


class FulfillmentStatus(str, Enum):
    """Values of ``Order.displayFulfillmentStatus``."""

    FULFILLED = "FULFILLED"
    IN_PROGRESS = "IN_PROGRESS"
    ON_HOLD = "ON_HOLD"
    OPEN = "OPEN"
    PARTIALLY_FULFILLED = "PARTIALLY_FULFILLED"
    PENDING_FULFILLMENT = "PENDING_FULFILLMENT"
    REQUEST_DECLINED = "REQUEST_DECLINED"
    RESTOCKED = "RESTOCKED"
    SCHEDULED = "SCHEDULED"
    UNFULFILLED = "UNFULFILLED"


def _parse_enum(enum_cls, value):
    """Map a wire value to the enum, keeping unknown values as raw strings."""
    if value is None:
        return None
    try:
        return enum_cls(value)
    except ValueError:
        return value


def _parse_datetime(value: str | None) -> datetime | None:
    """Parse an ISO 8601 timestamp as returned by Shopify."""
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _parse_tags(value: Any) -> tuple[str, ...]:
    # Bulk exports and some API versions return tags as a comma-separated string
    if not value:
        return ()
    if isinstance(value, str):
        return tuple(tag.strip() for tag in value.split(",") if tag.strip())
    return tuple(value)


@dataclass(frozen=True)
class CustomerRef:
    """Weak reference to the order's customer."""

    id: str | None = None
    legacy_resource_id: str | None = None
    first_name: str | None = None
    display_name: str | None = None
    email: str | None = None

    @classmethod
    def from_graphql(cls, node: dict[str, Any] | None) -> "CustomerRef | None":
        if not node:
            return None
        return cls(
            id=node.get("id"),
            legacy_resource_id=node.get("legacyResourceId"),
            first_name=node.get("firstName"),
            display_name=node.get("displayName"),
            email=node.get("email"),
        )


@dataclass(frozen=True)
class MailingAddress:
    """Billing or shipping address."""

    name: str | None = None
    company: str | None = None
    address1: str | None = None
    address2: str | None = None
    city: str | None = None
    zip: str | None = None
    province: str | None = None
    province_code: str | None = None
    country: str | None = None
    country_code: str | None = None
    phone: str | None = None

    @classmethod
    def from_graphql(cls, node: dict[str, Any] | None) -> "MailingAddress | None":
        if not node:
            return None
        return cls(
            name=node.get("name"),
            company=node.get("company"),
            address1=node.get("address1"),
            address2=node.get("address2"),
            city=node.get("city"),
            zip=node.get("zip"),
            province=node.get("province"),
            province_code=node.get("provinceCode"),
            country=node.get("country"),
            country_code=node.get("countryCodeV2"),
            phone=node.get("phone"),
        )


@dataclass(frozen=True)
class Transaction:
    """Payment transaction (gateway and payment id pair)."""

    gateway: str | None = None
    payment_id: str | None = None

    @classmethod
    def from_graphql(cls, node: dict[str, Any]) -> "Transaction":
        return cls(gateway=node.get("gateway"), payment_id=node.get("paymentId"))


@dataclass(frozen=True)
class ShippingLine:
    """Shipping method chosen for the order."""

    title: str | None = None

    @classmethod
    def from_graphql(cls, node: dict[str, Any] | None) -> "ShippingLine | None":
        if not node:
            return None
        return cls(title=node.get("title"))


@dataclass(frozen=True)
class Order:
    """
    Immutable order record decoded from a Shopify response.

    Which attributes are populated depends on the field profile of the query:
    the full profile carries addresses, transactions and priced line items;
    the light profile carries the shipping line, received total, note and
    fulfillment-oriented line items.
    """

    id: str
    legacy_resource_id: str | None = None
    name: str | None = None
    created_at: datetime | None = None
    processed_at: datetime | None = None
    email: str | None = None
    display_financial_status: FinancialStatus | str | None = None
    display_fulfillment_status: FulfillmentStatus | str | None = None
    customer: CustomerRef | None = None
    billing_address: MailingAddress | None = None
    shipping_address: MailingAddress | None = None
    shipping_line: ShippingLine | None = None
    total_received: Money | None = None
    transactions: tuple[Transaction, ...] = field(default_factory=tuple)
    line_items: tuple[LineItem, ...] = field(default_factory=tuple)
    tags: tuple[str, ...] = field(default_factory=tuple)
    note: str | None = None

    @classmethod
    def from_graphql(cls, node: dict[str, Any], line_item_profile: LineItemProfile) -> "Order":
        """
        Decode an ``Order`` node.

        Args:
            node: GraphQL node dict
            line_item_profile: Profile the nested line items were queried with

        Returns:
            Order: Decoded order
        """
        line_item_edges = (node.get("lineItems") or {}).get("edges") or []

        return cls(
            id=node["id"],
            legacy_resource_id=node.get("legacyResourceId"),
            name=node.get("name"),
            created_at=_parse_datetime(node.get("createdAt")),
            processed_at=_parse_datetime(node.get("processedAt")),
            email=node.get("email"),
            display_financial_status=_parse_enum(FinancialStatus, node.get("displayFinancialStatus")),
            display_fulfillment_status=_parse_enum(FulfillmentStatus, node.get("displayFulfillmentStatus")),
            customer=CustomerRef.from_graphql(node.get("customer")),
            billing_address=MailingAddress.from_graphql(node.get("billingAddress")),
            shipping_address=MailingAddress.from_graphql(node.get("shippingAddress")),
            shipping_line=ShippingLine.from_graphql(node.get("shippingLine")),
            total_received=Money.from_money_bag(node.get("totalReceivedSet")),
            transactions=tuple(Transaction.from_graphql(t) for t in node.get("transactions") or []),
            line_items=tuple(LineItem.from_graphql(edge["node"], line_item_profile) for edge in line_item_edges),
            tags=_parse_tags(node.get("tags")),
            note=node.get("note"),
        )
