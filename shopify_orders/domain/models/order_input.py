"""
Input record for the ``orderUpdate`` mutation.
"""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class AttributeInput:
    """Custom key/value attribute on an order."""

    key: str
    value: str


@dataclass(frozen=True)
class MailingAddressInput:
    """Replacement shipping address."""

    address1: Optional[str] = None
    address2: Optional[str] = None
    city: Optional[str] = None
    company: Optional[str] = None
    country_code: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    province_code: Optional[str] = None
    zip: Optional[str] = None

    def to_graphql(self) -> dict[str, Any]:
        values = {
            "address1": self.address1,
            "address2": self.address2,
            "city": self.city,
            "company": self.company,
            "countryCode": self.country_code,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "phone": self.phone,
            "provinceCode": self.province_code,
            "zip": self.zip,
        }
        return {key: value for key, value in values.items() if value is not None}


@dataclass(frozen=True)
class OrderInput:
    """
    Order identifier plus the fields to change.

    Fields left as None are omitted from the mutation and keep their
    current value on Shopify.
    """

    id: str
    email: Optional[str] = None
    note: Optional[str] = None
    tags: Optional[list[str]] = None
    shipping_address: Optional[MailingAddressInput] = None
    custom_attributes: Optional[list[AttributeInput]] = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_graphql(self) -> dict[str, Any]:
        """
        Render the ``OrderInput`` GraphQL variable.

        Returns:
            Dict: Input object with unset fields omitted
        """
        payload: dict[str, Any] = {"id": self.id}
        if self.email is not None:
            payload["email"] = self.email
        if self.note is not None:
            payload["note"] = self.note
        if self.tags is not None:
            payload["tags"] = list(self.tags)
        if self.shipping_address is not None:
            payload["shippingAddress"] = self.shipping_address.to_graphql()
        if self.custom_attributes is not None:
            payload["customAttributes"] = [{"key": a.key, "value": a.value} for a in self.custom_attributes]
        # Raw fields not modeled above, passed through untouched
        payload.update(self.extra)
        return payload
