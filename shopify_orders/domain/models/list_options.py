"""
Request-shaping and page-result value objects for order listing.
"""

from dataclasses import dataclass, field

from .order import Order


@dataclass(frozen=True)
class ListOptions:
    """
    Filter and pagination controls for listing orders.

    Attributes:
        query: Server-side search expression (e.g. ``"financial_status:paid"``)
        first: Number of orders after the ``after`` cursor (forward paging)
        last: Number of orders before the ``before`` cursor (backward paging)
        after: Opaque cursor to continue forward from
        before: Opaque cursor to continue backward from
        reverse: Reverse the server-side sort order

    Callers set at most one of ``first``/``last`` and at most one of
    ``after``/``before``. This is not validated; when both are set the
    pagination window keeps ``after`` and ``first``.

    Bulk listing only honors ``query``; the count and cursor fields apply to
    cursor-paginated listing.
    """

    query: str = ""
    first: int = 0
    last: int = 0
    after: str = ""
    before: str = ""
    reverse: bool = False


@dataclass(frozen=True)
class OrderPage:
    """
    One page of orders plus the cursors needed to continue from it.

    ``first_cursor`` and ``last_cursor`` are the cursors of the first and last
    edge of the page, or None when the page is empty.
    """

    orders: list[Order] = field(default_factory=list)
    first_cursor: str | None = None
    last_cursor: str | None = None
    has_next_page: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.orders
