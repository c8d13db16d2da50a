"""
Order mutations and user error aggregation.
"""

import logging
from typing import Any

from shopify_orders.domain.models import OrderInput, UserError
from shopify_orders.utils.error_handler import OrderUserErrorsException

logger = logging.getLogger(__name__)


def build_update_variables(order_input: OrderInput) -> dict[str, Any]:
    """The whole input travels as the single ``$input`` variable."""
    return {"input": order_input.to_graphql()}


def collect_user_errors(result: dict[str, Any], payload_field: str = "orderUpdate") -> list[UserError]:
    """Extract every user error from a mutation payload."""
    payload = result.get(payload_field) or {}
    return [UserError.from_graphql(error) for error in payload.get("userErrors") or []]


def raise_for_user_errors(result: dict[str, Any], payload_field: str = "orderUpdate") -> None:
    """
    Raise one exception carrying all user errors of a mutation response.

    Raises:
        OrderUserErrorsException: If the payload reports any user error
    """
    user_errors = collect_user_errors(result, payload_field)
    if user_errors:
        logger.warning(f"{payload_field} returned {len(user_errors)} user error(s)")
        raise OrderUserErrorsException(user_errors, operation=payload_field)
