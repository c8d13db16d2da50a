"""
Bulk operation client for the Shopify GraphQL API.

Bulk operations export an entire connection (no page size, no rate limit)
as a JSONL file. This client hides the asynchronous job behind a single
awaitable call: start the job, poll until it finishes, download the file and
rebuild the nested records.
"""

import asyncio
import json
import logging
import time
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

import aiohttp

from shopify_orders.db.queries import (
    BULK_OPERATION_STATUS_QUERY,
    CANCEL_BULK_OPERATION_MUTATION,
    CREATE_BULK_OPERATION_MUTATION,
)
from shopify_orders.utils.error_handler import BulkOperationException, ShopifyAPIException

from .protocols import QueryExecutor

logger = logging.getLogger(__name__)


class BulkOperationStatus:
    """Bulk operation states."""

    CREATED = "CREATED"
    RUNNING = "RUNNING"
    CANCELING = "CANCELING"
    COMPLETED = "COMPLETED"
    CANCELED = "CANCELED"
    FAILED = "FAILED"
    EXPIRED = "EXPIRED"


TERMINAL_FAILURE_STATUSES = (
    BulkOperationStatus.FAILED,
    BulkOperationStatus.CANCELED,
    BulkOperationStatus.EXPIRED,
)


def gid_type(gid: str) -> Optional[str]:
    """Return the object type of a Shopify GID (``gid://shopify/LineItem/1`` -> ``LineItem``)."""
    if not gid or not gid.startswith("gid://"):
        return None
    parts = gid.split("/")
    return parts[3] if len(parts) > 4 else None


def connection_field_for(type_name: str) -> str:
    """Default connection field for a child type: ``LineItem`` -> ``lineItems``."""
    return type_name[0].lower() + type_name[1:] + "s"


class ShopifyBulkOperationClient:
    """
    Implements the bulk executor contract on top of a query executor.

    Child rows in the export reference their parent through ``__parentId``.
    They are re-attached under ``<field>.edges[].node`` of the parent, where
    ``<field>`` comes from ``child_connections`` (object type -> field) or,
    failing that, from the pluralized camelCase type name.
    """

    DEFAULT_CHILD_CONNECTIONS = {"LineItem": "lineItems"}

    def __init__(
        self,
        executor: QueryExecutor,
        poll_interval: float = 5.0,
        max_poll_interval: float = 30.0,
        timeout_seconds: float = 1800.0,
        child_connections: Optional[Dict[str, str]] = None,
        download_session_factory=aiohttp.ClientSession,
    ):
        """
        Initialize the bulk client.

        Args:
            executor: Transport used to start and poll the job
            poll_interval: First wait between status checks, in seconds
            max_poll_interval: Upper bound for the progressive poll interval
            timeout_seconds: Give up (and cancel the job) after this long
            child_connections: Object type -> connection field overrides
            download_session_factory: Callable creating the session used for
                the export download (no Shopify credentials are sent there)
        """
        self.executor = executor
        self.poll_interval = poll_interval
        self.max_poll_interval = max_poll_interval
        self.timeout_seconds = timeout_seconds
        self.child_connections = {**self.DEFAULT_CHILD_CONNECTIONS, **(child_connections or {})}
        self._download_session_factory = download_session_factory

    async def bulk_query(self, document: str) -> List[Dict[str, Any]]:
        """
        Run a bulk export for ``document`` and return its top-level records.

        Args:
            document: Anonymous connection query without variables

        Returns:
            List: Top-level records in export order

        Raises:
            BulkOperationException: If the job fails, is canceled, expires or times out
            ShopifyAPIException: If a request to Shopify fails
        """
        started = time.monotonic()

        operation_id = await self._start_bulk_operation(document)
        logger.info(f"Started bulk operation: {operation_id}")

        operation = await self._wait_for_completion(operation_id)

        url = operation.get("url")
        if not url:
            # A completed export with no matching objects has no file
            logger.info(f"Bulk operation {operation_id} completed without results")
            return []

        lines = await self._download_results(url)
        records = self.assemble_records(lines)

        logger.info(
            f"Bulk operation {operation_id} completed: {len(records)} records "
            f"in {time.monotonic() - started:.2f}s"
        )
        return records

    async def _start_bulk_operation(self, document: str) -> str:
        """
        Start a bulk query.

        Returns:
            str: Bulk operation ID
        """
        result = await self.executor.mutate(CREATE_BULK_OPERATION_MUTATION, {"query": document})

        payload = result.get("bulkOperationRunQuery") or {}
        user_errors = payload.get("userErrors") or []
        if user_errors:
            error_messages = [error.get("message", str(error)) for error in user_errors]
            raise BulkOperationException(
                f"Failed to start bulk operation: {', '.join(error_messages)}",
                details={"user_errors": user_errors},
            )

        operation_id = (payload.get("bulkOperation") or {}).get("id")
        if not operation_id:
            raise BulkOperationException(
                "No operation ID returned from bulk operation", details={"response": payload}
            )
        return operation_id

    async def _wait_for_completion(self, operation_id: str) -> Dict[str, Any]:
        """
        Poll the bulk operation until it completes.

        Returns:
            Dict: Final bulk operation object
        """
        started = time.monotonic()
        check_interval = self.poll_interval

        while True:
            result = await self.executor.query(BULK_OPERATION_STATUS_QUERY, {"id": operation_id})

            operation = result.get("node")
            if not operation:
                raise BulkOperationException(f"Bulk operation not found: {operation_id}", operation_id=operation_id)

            status = operation.get("status")
            logger.debug(f"Bulk operation {operation_id} status: {status}")

            if status == BulkOperationStatus.COMPLETED:
                return operation

            if status in TERMINAL_FAILURE_STATUSES:
                raise BulkOperationException(
                    f"Bulk operation {operation_id} finished with status {status} "
                    f"(error code: {operation.get('errorCode')})",
                    operation_id=operation_id,
                    status=status,
                    details={"error_code": operation.get("errorCode")},
                )

            elapsed = time.monotonic() - started
            if elapsed > self.timeout_seconds:
                await self._cancel(operation_id)
                raise BulkOperationException(
                    f"Bulk operation {operation_id} timed out after {self.timeout_seconds:.0f} seconds",
                    operation_id=operation_id,
                    status=status,
                    timed_out=True,
                )

            await asyncio.sleep(check_interval)
            check_interval = min(check_interval * 1.2, self.max_poll_interval)

    async def _cancel(self, operation_id: str):
        """Ask Shopify to cancel a job we stopped waiting for."""
        try:
            await self.executor.mutate(CANCEL_BULK_OPERATION_MUTATION, {"id": operation_id})
            logger.warning(f"Canceled bulk operation {operation_id}")
        except ShopifyAPIException as e:
            logger.warning(f"Could not cancel bulk operation {operation_id}: {e}")

    async def _download_results(self, download_url: str) -> List[str]:
        """
        Download the JSONL export.

        Returns:
            List: Non-empty lines of the file
        """
        logger.debug(f"Downloading bulk results from: {urlparse(download_url).netloc}")

        try:
            async with self._download_session_factory() as session:
                async with session.get(download_url) as response:
                    if response.status != 200:
                        raise ShopifyAPIException(
                            f"Failed to download bulk results: HTTP {response.status}",
                            api_response_code=response.status,
                        )
                    content = await response.text()
        except aiohttp.ClientError as e:
            raise ShopifyAPIException(f"Failed to download bulk results: {e}") from e

        return [line for line in content.splitlines() if line.strip()]

    def assemble_records(self, lines: List[str]) -> List[Dict[str, Any]]:
        """
        Parse JSONL lines and nest child rows under their parents.

        Parents always precede their children in a Shopify export; a row
        whose parent has not been seen is an error.

        Args:
            lines: JSONL lines from the export

        Returns:
            List: Top-level records in file order
        """
        records: List[Dict[str, Any]] = []
        by_id: Dict[str, Dict[str, Any]] = {}

        for line_num, line in enumerate(lines, 1):
            try:
                row = json.loads(line)
            except json.JSONDecodeError as e:
                raise BulkOperationException(
                    f"Failed to parse bulk result line {line_num}: {e}",
                    details={"line": line[:100], "line_number": line_num},
                ) from e

            parent_id = row.pop("__parentId", None)
            row_id = row.get("id")
            if row_id:
                by_id[row_id] = row

            if parent_id is None:
                records.append(row)
                continue

            parent = by_id.get(parent_id)
            if parent is None:
                raise BulkOperationException(
                    f"Bulk result line {line_num} references unknown parent {parent_id}",
                    details={"line_number": line_num, "parent_id": parent_id},
                )

            type_name = row.get("__typename") or gid_type(row_id or "")
            if not type_name:
                raise BulkOperationException(
                    f"Cannot determine the type of bulk result line {line_num}",
                    details={"line_number": line_num},
                )
            field_name = self.child_connections.get(type_name) or connection_field_for(type_name)
            parent.setdefault(field_name, {}).setdefault("edges", []).append({"node": row})

        return records
