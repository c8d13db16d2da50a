"""
Cursor pagination window selection.

A page request sends the filter, the ``reverse`` flag and at most one cursor
and one count. When a caller sets both members of a pair, the forward member
wins: ``after`` over ``before`` and ``first`` over ``last``. Empty cursors and
non-positive counts count as unset.
"""

from dataclasses import dataclass
from typing import Any

from shopify_orders.domain.models import ListOptions


@dataclass(frozen=True)
class PaginationWindow:
    """The cursor and count actually sent for one page."""

    after: str | None = None
    before: str | None = None
    first: int | None = None
    last: int | None = None


def select_pagination_window(options: ListOptions) -> PaginationWindow:
    """
    Resolve the cursor pair and the count pair of ``options``.

    Tie-break: ``after`` beats ``before``; ``first`` beats ``last``.
    """
    after = before = None
    if options.after:
        after = options.after
    elif options.before:
        before = options.before

    first = last = None
    if options.first > 0:
        first = options.first
    elif options.last > 0:
        last = options.last

    return PaginationWindow(after=after, before=before, first=first, last=last)


def build_page_variables(options: ListOptions) -> dict[str, Any]:
    """
    Build the variables of one page request.

    ``query`` and ``reverse`` are always present; of each pagination pair
    only the selected member is included.
    """
    window = select_pagination_window(options)

    variables: dict[str, Any] = {
        "query": options.query,
        "reverse": options.reverse,
    }
    if window.after is not None:
        variables["after"] = window.after
    if window.before is not None:
        variables["before"] = window.before
    if window.first is not None:
        variables["first"] = window.first
    if window.last is not None:
        variables["last"] = window.last
    return variables
