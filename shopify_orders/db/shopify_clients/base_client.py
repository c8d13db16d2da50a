"""
Base Shopify GraphQL client.

This module provides the transport used by every other client:
connection management, request pacing, retries on throttling and network
failures, and GraphQL error detection.
"""

import asyncio
import logging
import time
from typing import Any, Dict, Optional

import aiohttp
from aiohttp import ClientTimeout

from shopify_orders.core.config import Settings, get_settings
from shopify_orders.db.queries import SHOP_INFO_QUERY
from shopify_orders.utils.error_handler import ShopifyAPIException
from shopify_orders.version import __version__

logger = logging.getLogger(__name__)


class BaseShopifyGraphQLClient:
    """
    Base client for Shopify GraphQL API operations.

    Implements the query/mutate executor contract. Retries and pacing live
    here; callers above this layer never retry.
    """

    def __init__(self, settings: Optional[Settings] = None, session: Optional[aiohttp.ClientSession] = None):
        """
        Initialize the base Shopify GraphQL client.

        Args:
            settings: Settings to use (defaults to the cached settings)
            session: Pre-built HTTP session (the client will not close it)
        """
        self.settings = settings or get_settings()
        self.shop_url = self.settings.SHOPIFY_SHOP_URL
        self.access_token = self.settings.SHOPIFY_ACCESS_TOKEN
        self.api_version = self.settings.SHOPIFY_API_VERSION
        self.graphql_url = self.settings.graphql_url
        self.max_retries = self.settings.SHOPIFY_MAX_RETRIES

        self.session: Optional[aiohttp.ClientSession] = session
        self._owns_session = session is None
        self._last_request_time = 0.0
        self._min_request_interval = self.settings.SHOPIFY_MIN_REQUEST_INTERVAL
        self._rate_limit_lock = asyncio.Lock()

        logger.debug(f"Initialized Shopify GraphQL client for {self.shop_url}")

    async def initialize(self, verify: bool = True):
        """
        Create the HTTP session and optionally test the connection.

        Args:
            verify: Run a shop query to validate credentials

        Raises:
            ShopifyAPIException: If initialization fails
        """
        if self.session is None:
            timeout = ClientTimeout(
                total=self.settings.SHOPIFY_REQUEST_TIMEOUT,
                connect=self.settings.SHOPIFY_CONNECT_TIMEOUT,
            )
            connector = aiohttp.TCPConnector(limit=100, limit_per_host=30)

            self.session = aiohttp.ClientSession(
                timeout=timeout,
                connector=connector,
                headers={
                    "Content-Type": "application/json",
                    "X-Shopify-Access-Token": self.access_token,
                    "User-Agent": f"shopify-orders/{__version__}",
                },
            )
            self._owns_session = True

        if verify:
            try:
                await self.test_connection()
            except ShopifyAPIException:
                await self.close()
                raise

        logger.info("Shopify GraphQL client initialized")

    async def close(self):
        """Close the HTTP session if this client created it."""
        if self.session and self._owns_session:
            await self.session.close()
            logger.debug("Shopify GraphQL client closed")
        self.session = None

    async def __aenter__(self):
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def query(self, document: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Run a GraphQL query and return its ``data`` object."""
        return await self._execute_query(document, variables)

    async def mutate(self, document: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Run a GraphQL mutation and return its ``data`` object."""
        return await self._execute_query(document, variables)

    async def _execute_query(
        self, query: str, variables: Optional[Dict[str, Any]] = None, max_retries: Optional[int] = None
    ) -> Dict[str, Any]:
        """
        Execute a GraphQL document with pacing and retries.

        Retries HTTP 429, throttled GraphQL responses, 5xx responses and
        network errors. Other GraphQL errors fail immediately.

        Args:
            query: GraphQL document
            variables: Document variables
            max_retries: Attempts before giving up (defaults to settings)

        Returns:
            Dict: Response ``data`` object

        Raises:
            ShopifyAPIException: If the request fails after retries
        """
        if not self.session:
            raise ShopifyAPIException("Client not initialized. Call initialize() first.")

        attempts = max_retries or self.max_retries
        payload: Dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = variables

        last_exception: Optional[ShopifyAPIException] = None

        for attempt in range(attempts):
            await self._check_rate_limit()
            try:
                async with self.session.post(self.graphql_url, json=payload) as response:
                    if response.status == 429:
                        retry_after = self._parse_retry_after(response.headers.get("Retry-After"))
                        last_exception = ShopifyAPIException(
                            "Rate limit exceeded", api_response_code=429, rate_limited=True, retry_after=retry_after
                        )
                        logger.warning(f"Rate limit exceeded, waiting {retry_after}s (attempt {attempt + 1})")
                        await asyncio.sleep(retry_after)
                        continue

                    if response.status >= 500:
                        last_exception = ShopifyAPIException(
                            f"HTTP {response.status} from Shopify", api_response_code=response.status
                        )
                        await self._backoff(attempt, attempts, f"HTTP {response.status}")
                        continue

                    try:
                        response_data = await response.json(content_type=None)
                    except ValueError as e:
                        if response.status != 200:
                            raise ShopifyAPIException(
                                f"HTTP {response.status}: non-JSON response body", api_response_code=response.status
                            ) from e
                        raise ShopifyAPIException(
                            f"Invalid JSON response: {e}", api_response_code=response.status
                        ) from e

                    if response.status != 200:
                        raise ShopifyAPIException(
                            f"HTTP {response.status}: {response_data.get('errors', 'Unknown error')}",
                            api_response_code=response.status,
                        )

                    errors = response_data.get("errors")
                    if errors:
                        if self._is_throttled(errors):
                            last_exception = ShopifyAPIException(
                                "GraphQL query throttled", api_response_code=200, rate_limited=True
                            )
                            await self._backoff(attempt, attempts, "Throttled")
                            continue
                        error_messages = [err.get("message", str(err)) for err in errors]
                        raise ShopifyAPIException(
                            f"GraphQL errors: {', '.join(error_messages)}",
                            api_response_code=response.status,
                            details={"errors": errors},
                        )

                    return response_data.get("data") or {}

            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                last_exception = ShopifyAPIException(f"Network error: {str(e) or type(e).__name__}")
                await self._backoff(attempt, attempts, "Network error")

        raise last_exception or ShopifyAPIException("Query execution failed after retries")

    async def _backoff(self, attempt: int, attempts: int, reason: str):
        """Sleep before the next attempt, unless this was the last one."""
        if attempt < attempts - 1:
            wait_time = min(2**attempt, 10)  # Exponential backoff, max 10s
            logger.warning(f"{reason}, retrying in {wait_time}s (attempt {attempt + 1})")
            await asyncio.sleep(wait_time)

    @staticmethod
    def _is_throttled(errors: list) -> bool:
        return any((err.get("extensions") or {}).get("code") == "THROTTLED" for err in errors)

    @staticmethod
    def _parse_retry_after(value: Optional[str], default: float = 2.0) -> float:
        """Seconds to wait from a Retry-After header ("2", "2.0"); ``default`` when absent or malformed."""
        if value is None:
            return default
        try:
            retry_after = float(value)
        except ValueError:
            logger.debug(f"Ignoring malformed Retry-After header: {value!r}")
            return default
        return max(retry_after, 0.0)

    async def _check_rate_limit(self):
        """
        Keep a minimum interval between consecutive requests.

        Concurrent callers take turns: each one waits for the interval and
        claims its send slot while holding the lock.
        """
        async with self._rate_limit_lock:
            elapsed = time.monotonic() - self._last_request_time
            if elapsed < self._min_request_interval:
                await asyncio.sleep(self._min_request_interval - elapsed)
            self._last_request_time = time.monotonic()

    async def test_connection(self) -> bool:
        """
        Test the connection to Shopify GraphQL API.

        Returns:
            bool: True if connection is successful

        Raises:
            ShopifyAPIException: If connection test fails
        """
        try:
            result = await self._execute_query(SHOP_INFO_QUERY, max_retries=1)
        except ShopifyAPIException as e:
            logger.error(f"Connection test failed: {e}")
            raise ShopifyAPIException(f"Connection test failed: {e.message}") from e

        shop_info = result.get("shop", {})
        logger.info(f"Connected to Shopify store: {shop_info.get('name', 'Unknown')}")
        return True

    def __repr__(self):
        return (
            f"{type(self).__name__}("
            f"shop_url='{self.shop_url}', "
            f"api_version='{self.api_version}', "
            f"initialized={self.session is not None})"
        )
