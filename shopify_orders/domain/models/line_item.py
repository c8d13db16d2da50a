"""
Line item domain model.

A line item is decoded in one of two shapes depending on the field profile
that was queried; the two shapes are never populated together.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from shopify_orders.domain.value_objects.money import Money


class LineItemProfile(Enum):
    """Field profile a line item was decoded from."""

    # Product reference and currency-tagged pricing
    FULL = "full"
    # Fulfillment quantity/status, vendor and variant title
    LIGHT = "light"


@dataclass(frozen=True)
class LineItem:
    """
    Immutable line item of an order.

    Attributes:
        id: Shopify GID of the line item
        profile: Which field profile populated this record
        sku: Stock keeping unit
        quantity: Ordered quantity
        product_legacy_id: Numeric product id (full profile)
        name: Line item name (full profile)
        original_unit_price: Price before discounts (full profile)
        discounted_unit_price: Price after discounts (full profile)
        fulfillable_quantity: Quantity left to fulfill (light profile)
        fulfillment_status: Fulfillment status (light profile)
        vendor: Product vendor (light profile)
        title: Product title (light profile)
        variant_title: Variant title (light profile)
    """

    id: str | None
    profile: LineItemProfile
    sku: str | None = None
    quantity: int | None = None
    product_legacy_id: str | None = None
    name: str | None = None
    original_unit_price: Money | None = None
    discounted_unit_price: Money | None = None
    fulfillable_quantity: int | None = None
    fulfillment_status: str | None = None
    vendor: str | None = None
    title: str | None = None
    variant_title: str | None = None

    @classmethod
    def from_graphql(cls, node: dict[str, Any], profile: LineItemProfile) -> "LineItem":
        """
        Decode a ``LineItem`` node selected with the given profile.

        Args:
            node: GraphQL node dict
            profile: Profile the node was queried with

        Returns:
            LineItem: Decoded line item
        """
        common = {
            "id": node.get("id"),
            "profile": profile,
            "sku": node.get("sku"),
            "quantity": node.get("quantity"),
        }

        if profile is LineItemProfile.FULL:
            product = node.get("product") or {}
            return cls(
                **common,
                product_legacy_id=product.get("legacyResourceId"),
                name=node.get("name"),
                original_unit_price=Money.from_money_bag(node.get("originalUnitPriceSet")),
                discounted_unit_price=Money.from_money_bag(node.get("discountedUnitPriceSet")),
            )

        return cls(
            **common,
            fulfillable_quantity=node.get("fulfillableQuantity"),
            fulfillment_status=node.get("fulfillmentStatus"),
            vendor=node.get("vendor"),
            title=node.get("title"),
            variant_title=node.get("variantTitle"),
        )
