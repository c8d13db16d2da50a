"""
Domain models for Shopify orders.
"""

from .line_item import LineItem, LineItemProfile
from .list_options import ListOptions, OrderPage
from .order import (
    CustomerRef,
    FinancialStatus,
    FulfillmentStatus,
    MailingAddress,
    Order,
    ShippingLine,
    Transaction,
)
from .order_input import AttributeInput, MailingAddressInput, OrderInput
from .user_error import UserError

__all__ = [
    "AttributeInput",
    "CustomerRef",
    "FinancialStatus",
    "FulfillmentStatus",
    "LineItem",
    "LineItemProfile",
    "ListOptions",
    "MailingAddress",
    "MailingAddressInput",
    "Order",
    "OrderInput",
    "OrderPage",
    "ShippingLine",
    "Transaction",
    "UserError",
]
