"""Shared fixtures: Shopify order payloads in both field profiles."""

import pytest

from shopify_orders.core.config import Settings


@pytest.fixture
def settings():
    """Settings with no request pacing, for transport tests."""
    return Settings(
        SHOPIFY_SHOP_URL="test-shop.myshopify.com",
        SHOPIFY_ACCESS_TOKEN="shpat_test",
        SHOPIFY_MIN_REQUEST_INTERVAL=0,
        SHOPIFY_MAX_RETRIES=3,
    )


@pytest.fixture
def full_order_node():
    """Order node selected with the full profile."""
    return {
        "id": "gid://shopify/Order/1001",
        "legacyResourceId": "1001",
        "name": "#1001",
        "createdAt": "2025-01-15T10:30:00Z",
        "processedAt": "2025-01-15T10:31:00Z",
        "email": "customer@example.com",
        "displayFinancialStatus": "PAID",
        "displayFulfillmentStatus": "UNFULFILLED",
        "customer": {"id": "gid://shopify/Customer/77", "legacyResourceId": "77"},
        "billingAddress": {
            "name": "John Doe",
            "company": None,
            "address1": "123 Main St",
            "address2": "",
            "city": "New York",
            "zip": "10001",
            "provinceCode": "NY",
            "countryCodeV2": "US",
            "phone": "+15555550100",
        },
        "shippingAddress": {
            "name": "John Doe",
            "address1": "123 Main St",
            "city": "New York",
            "zip": "10001",
            "provinceCode": "NY",
            "countryCodeV2": "US",
        },
        "transactions": [{"gateway": "shopify_payments", "paymentId": "c1234.1"}],
        "tags": ["vip", "wholesale"],
        "lineItems": {
            "edges": [
                {
                    "node": {
                        "id": "gid://shopify/LineItem/111",
                        "product": {"legacyResourceId": "333"},
                        "name": "Blue Sneakers - 42",
                        "sku": "SNEAK-BLUE-42",
                        "quantity": 2,
                        "originalUnitPriceSet": {"shopMoney": {"amount": "75.00", "currencyCode": "USD"}},
                        "discountedUnitPriceSet": {"shopMoney": {"amount": "70.00", "currencyCode": "USD"}},
                    }
                }
            ]
        },
    }


def make_light_order_node(number: int) -> dict:
    """Order node selected with the light profile."""
    return {
        "id": f"gid://shopify/Order/{number}",
        "legacyResourceId": str(number),
        "name": f"#{number}",
        "createdAt": "2025-02-01T08:00:00Z",
        "customer": {
            "id": "gid://shopify/Customer/5",
            "legacyResourceId": "5",
            "firstName": "Jane",
            "displayName": "Jane Smith",
            "email": "jane@example.com",
        },
        "shippingAddress": {
            "address1": "1 Elm St",
            "address2": None,
            "city": "Austin",
            "province": "Texas",
            "country": "United States",
            "zip": "73301",
        },
        "shippingLine": {"title": "Standard"},
        "totalReceivedSet": {"shopMoney": {"amount": "42.50"}},
        "note": "Leave at the door",
        "tags": ["online"],
        "lineItems": {
            "edges": [
                {
                    "node": {
                        "id": f"gid://shopify/LineItem/{number}1",
                        "sku": "MUG-01",
                        "quantity": 1,
                        "fulfillableQuantity": 1,
                        "fulfillmentStatus": "unfulfilled",
                        "vendor": "Acme",
                        "title": "Coffee Mug",
                        "variantTitle": "Red",
                    }
                }
            ]
        },
    }


@pytest.fixture
def light_order_node():
    return make_light_order_node(2001)


@pytest.fixture
def light_order_node_factory():
    return make_light_order_node


@pytest.fixture
def orders_page_response():
    """``data`` of a page query returning three edges."""
    return {
        "orders": {
            "edges": [
                {"node": make_light_order_node(3001), "cursor": "cursor-a"},
                {"node": make_light_order_node(3002), "cursor": "cursor-b"},
                {"node": make_light_order_node(3003), "cursor": "cursor-c"},
            ],
            "pageInfo": {"hasNextPage": True},
        }
    }
