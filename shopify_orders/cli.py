"""
Command line access to the order service.

Usage:
    shopify-orders get gid://shopify/Order/1
    shopify-orders list --query "financial_status:paid"
    shopify-orders list-all
    shopify-orders page --first 10 --after <cursor>
    shopify-orders update gid://shopify/Order/1 --note "Gift wrap" --tags vip,gift

Results are printed as JSON on stdout; logs go to stderr.
"""

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import asdict, is_dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional, Sequence

from shopify_orders.client import ShopifyClient
from shopify_orders.core.logging_config import setup_logging
from shopify_orders.domain.models import ListOptions, OrderInput
from shopify_orders.utils.error_handler import AppException, log_error

logger = logging.getLogger(__name__)


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def to_json(value: Any) -> str:
    """Serialize domain records (dataclasses) to indented JSON."""
    if is_dataclass(value):
        value = asdict(value)
    elif isinstance(value, list):
        value = [asdict(item) if is_dataclass(item) else item for item in value]
    return json.dumps(value, default=_json_default, indent=2, ensure_ascii=False)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shopify-orders",
        description="Read and update Shopify orders",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    get_parser = subparsers.add_parser("get", help="Fetch one order by GID")
    get_parser.add_argument("order_id", help="Order GID, e.g. gid://shopify/Order/1")

    list_parser = subparsers.add_parser("list", help="Export orders matching a filter (bulk operation)")
    list_parser.add_argument("--query", default="", help="Shopify search expression")

    subparsers.add_parser("list-all", help="Export every order (bulk operation)")

    page_parser = subparsers.add_parser("page", help="Fetch one cursor-paginated page")
    page_parser.add_argument("--query", default="", help="Shopify search expression")
    count = page_parser.add_mutually_exclusive_group()
    count.add_argument("--first", type=int, default=0, help="Orders after the cursor")
    count.add_argument("--last", type=int, default=0, help="Orders before the cursor")
    cursor = page_parser.add_mutually_exclusive_group()
    cursor.add_argument("--after", default="", help="Continue forward from this cursor")
    cursor.add_argument("--before", default="", help="Continue backward from this cursor")
    page_parser.add_argument("--reverse", action="store_true", help="Reverse the sort order")

    update_parser = subparsers.add_parser("update", help="Update an order")
    update_parser.add_argument("order_id", help="Order GID")
    update_parser.add_argument("--email", help="New contact email")
    update_parser.add_argument("--note", help="New order note")
    update_parser.add_argument("--tags", help="Comma-separated tags (replaces existing tags)")

    return parser


async def run_command(client: ShopifyClient, args: argparse.Namespace) -> Any:
    """Dispatch a parsed command to the order service and return its result."""
    if args.command == "get":
        return await client.orders.get(args.order_id)

    if args.command == "list":
        return await client.orders.list(ListOptions(query=args.query))

    if args.command == "list-all":
        return await client.orders.list_all()

    if args.command == "page":
        options = ListOptions(
            query=args.query,
            first=args.first,
            last=args.last,
            after=args.after,
            before=args.before,
            reverse=args.reverse,
        )
        return await client.orders.list_after_cursor(options)

    if args.command == "update":
        tags = [tag.strip() for tag in args.tags.split(",") if tag.strip()] if args.tags is not None else None
        await client.orders.update(OrderInput(id=args.order_id, email=args.email, note=args.note, tags=tags))
        return {"updated": args.order_id}

    raise ValueError(f"Unknown command: {args.command}")


async def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging()

    try:
        async with ShopifyClient() as client:
            result = await run_command(client, args)
    except AppException as e:
        log_error(e, {"command": args.command})
        return 1

    print(to_json(result))
    return 0


def run():
    """Console script entry point."""
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        sys.exit(130)


if __name__ == "__main__":
    run()
