"""Tests for order domain models and value objects."""

from dataclasses import FrozenInstanceError
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from shopify_orders.domain.models import (
    AttributeInput,
    FinancialStatus,
    FulfillmentStatus,
    LineItemProfile,
    MailingAddressInput,
    Order,
    OrderInput,
    UserError,
)
from shopify_orders.domain.value_objects.money import Money


class TestMoney:
    def test_from_money_bag(self):
        money = Money.from_money_bag({"shopMoney": {"amount": "19.90", "currencyCode": "EUR"}})

        assert money == Money(Decimal("19.90"), "EUR")
        assert str(money) == "EUR 19.90"

    def test_currency_is_optional(self):
        money = Money.from_money_bag({"shopMoney": {"amount": "0"}})

        assert money.currency is None
        assert money.is_zero

    def test_absent_bag_is_none(self):
        assert Money.from_money_bag(None) is None
        assert Money.from_money_bag({"shopMoney": {}}) is None

    def test_invalid_values_raise(self):
        with pytest.raises(ValueError):
            Money("abc")
        with pytest.raises(ValueError):
            Money(Decimal("1"), "EURO")


class TestOrderFromGraphql:
    def test_full_profile_fields(self, full_order_node):
        order = Order.from_graphql(full_order_node, LineItemProfile.FULL)

        assert order.id == "gid://shopify/Order/1001"
        assert order.created_at == datetime(2025, 1, 15, 10, 30, tzinfo=timezone.utc)
        assert order.display_financial_status is FinancialStatus.PAID
        assert order.display_fulfillment_status is FulfillmentStatus.UNFULFILLED
        assert order.customer.legacy_resource_id == "77"
        assert order.billing_address.country_code == "US"
        assert order.transactions[0].payment_id == "c1234.1"
        assert order.tags == ("vip", "wholesale")
        assert order.shipping_line is None

        line_item = order.line_items[0]
        assert line_item.quantity == 2
        assert line_item.original_unit_price == Money(Decimal("75.00"), "USD")
        assert line_item.discounted_unit_price.amount == Decimal("70.00")

    def test_light_profile_fields(self, light_order_node):
        order = Order.from_graphql(light_order_node, LineItemProfile.LIGHT)

        assert order.customer.display_name == "Jane Smith"
        assert order.shipping_address.province == "Texas"
        assert order.shipping_line.title == "Standard"
        assert order.total_received == Money(Decimal("42.50"))
        assert order.note == "Leave at the door"
        assert order.billing_address is None
        assert order.transactions == ()

        line_item = order.line_items[0]
        assert line_item.fulfillable_quantity == 1
        assert line_item.vendor == "Acme"
        assert line_item.name is None

    def test_unknown_status_is_kept_as_string(self, full_order_node):
        full_order_node["displayFinancialStatus"] = "SOMETHING_NEW"

        order = Order.from_graphql(full_order_node, LineItemProfile.FULL)

        assert order.display_financial_status == "SOMETHING_NEW"

    def test_comma_separated_tags(self, full_order_node):
        full_order_node["tags"] = "vip, wholesale ,"

        assert Order.from_graphql(full_order_node, LineItemProfile.FULL).tags == ("vip", "wholesale")

    def test_minimal_node(self):
        order = Order.from_graphql({"id": "gid://shopify/Order/1"}, LineItemProfile.FULL)

        assert order.line_items == ()
        assert order.created_at is None
        assert order.customer is None

    def test_order_is_immutable(self, full_order_node):
        order = Order.from_graphql(full_order_node, LineItemProfile.FULL)

        with pytest.raises(FrozenInstanceError):
            order.note = "changed"


class TestOrderInput:
    def test_unset_fields_are_omitted(self):
        assert OrderInput(id="gid://shopify/Order/1").to_graphql() == {"id": "gid://shopify/Order/1"}

    def test_all_fields(self):
        order_input = OrderInput(
            id="gid://shopify/Order/1",
            email="a@example.com",
            note="",
            tags=["vip"],
            shipping_address=MailingAddressInput(address1="1 Main St", country_code="US", zip="10001"),
            custom_attributes=[AttributeInput("gift", "yes")],
            extra={"poNumber": "PO-9"},
        )

        assert order_input.to_graphql() == {
            "id": "gid://shopify/Order/1",
            "email": "a@example.com",
            "note": "",
            "tags": ["vip"],
            "shippingAddress": {"address1": "1 Main St", "countryCode": "US", "zip": "10001"},
            "customAttributes": [{"key": "gift", "value": "yes"}],
            "poNumber": "PO-9",
        }


class TestUserError:
    def test_str_with_field_path(self):
        error = UserError.from_graphql({"field": ["shippingAddress", "zip"], "message": "is invalid"})

        assert str(error) == "shippingAddress.zip: is invalid"

    def test_str_without_field(self):
        error = UserError.from_graphql({"field": None, "message": "Order is archived"})

        assert str(error) == "general: Order is archived"
