"""
Money value object for monetary amounts tagged with a currency.

Shopify returns amounts as decimal strings inside ``MoneyBag`` objects
(``{"shopMoney": {"amount": "12.50", "currencyCode": "USD"}}``).
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Optional


@dataclass(frozen=True)
class Money:
    """
    Immutable value object representing a monetary amount with currency.

    Attributes:
        amount: The monetary amount as Decimal for precision
        currency: ISO 4217 currency code, or None when the query did not select it

    Example:
        >>> price = Money(amount=Decimal("99.99"), currency="USD")
        >>> str(price)
        'USD 99.99'
    """

    amount: Decimal
    currency: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate money object after initialization."""
        if not isinstance(self.amount, Decimal):
            try:
                object.__setattr__(self, "amount", Decimal(str(self.amount)))
            except InvalidOperation as e:
                raise ValueError(f"Invalid money amount: {self.amount!r}") from e

        if self.currency is not None and len(self.currency) != 3:
            raise ValueError(f"Invalid currency code: {self.currency}")

    def __str__(self) -> str:
        if self.currency:
            return f"{self.currency} {self.amount}"
        return str(self.amount)

    def __repr__(self) -> str:
        return f"Money(amount=Decimal('{self.amount}'), currency={self.currency!r})"

    @property
    def is_zero(self) -> bool:
        """Check if amount is zero."""
        return self.amount == Decimal("0")

    @classmethod
    def from_money_bag(cls, money_bag: Optional[dict[str, Any]]) -> Optional["Money"]:
        """
        Build Money from a Shopify ``MoneyBag`` (``priceSet``) object.

        Args:
            money_bag: Dict with a ``shopMoney`` entry, or None

        Returns:
            Money or None when the bag or its amount is absent
        """
        if not money_bag:
            return None
        shop_money = money_bag.get("shopMoney") or {}
        amount = shop_money.get("amount")
        if amount is None:
            return None
        return cls(amount=Decimal(str(amount)), currency=shop_money.get("currencyCode"))
