"""
Executor contracts consumed by the order service.

The service depends only on these two protocols; the aiohttp clients in
this package implement them, and tests substitute mocks.
"""

from typing import Any, Optional, Protocol


class QueryExecutor(Protocol):
    """Runs one GraphQL query or mutation and returns its ``data`` object."""

    async def query(self, document: str, variables: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        ...

    async def mutate(self, document: str, variables: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        ...


class BulkExecutor(Protocol):
    """
    Materializes an unbounded connection query.

    Returns the top-level records in export order, with nested connection
    rows re-attached under ``<field>.edges[].node`` of their parent.
    """

    async def bulk_query(self, document: str) -> list[dict[str, Any]]:
        ...
