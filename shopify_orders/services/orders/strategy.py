"""
Execution strategy for each order operation.

Listing without an upper bound is never paginated interactively: ``list``
and ``list_all`` always go through a bulk export, whatever the expected
result size. Only ``list_after_cursor`` pages synchronously.
"""

from enum import Enum


class ExecutionStrategy(Enum):
    """Executor used by an operation; the value is its error tag."""

    QUERY = "query"
    BULK_QUERY = "bulk query"
    MUTATION = "mutation"

    @property
    def operation_kind(self) -> str:
        return self.value


class OrderOperation(Enum):
    GET = "get"
    LIST = "list"
    LIST_ALL = "list_all"
    LIST_AFTER_CURSOR = "list_after_cursor"
    UPDATE = "update"


_STRATEGIES = {
    OrderOperation.GET: ExecutionStrategy.QUERY,
    OrderOperation.LIST: ExecutionStrategy.BULK_QUERY,
    OrderOperation.LIST_ALL: ExecutionStrategy.BULK_QUERY,
    OrderOperation.LIST_AFTER_CURSOR: ExecutionStrategy.QUERY,
    OrderOperation.UPDATE: ExecutionStrategy.MUTATION,
}


def strategy_for(operation: OrderOperation) -> ExecutionStrategy:
    """Return the executor strategy an order operation is routed to."""
    return _STRATEGIES[operation]
