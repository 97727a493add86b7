#!/usr/bin/env python3
"""
eBay Shopping API client — Command-line entry point.

A small smoke tool around ShoppingService. It reads the token, endpoint, site
and timeout from a .env file (see settings.py), issues one Shopping API call
and prints a short summary of the response envelope and payload.

Usage:
    ebay-shopping time                               # GeteBayTime
    ebay-shopping category -1 --children             # Top-level categories
    ebay-shopping status 1234 5678                   # GetItemStatus
    ebay-shopping item 1234 --selector Details       # GetSingleItem
    ebay-shopping items 1234,5678                    # GetMultipleItems
    ebay-shopping shipping 1234 --country US --postal-code 95125 --details
    ebay-shopping user someone --selector FeedbackHistory
    ebay-shopping products "harry potter" --max-entries 5
    ebay-shopping --debug --sandbox time             # Verbose, sandbox endpoint
    ebay-shopping --env /path/.env time              # Alternate .env file
"""

import argparse
import logging
import sys
from typing import Iterable, List

from . import __version__
from .constants import DEFAULT_ITEMS_PER_PAGE, AckCode, ItemSelector, UserProfileSelector
from .errors import RemoteCallFailed, ShoppingAPIError
from .service import ShoppingService


def item_ids_from(values: Iterable[str]) -> List[str]:
    """Split comma/space separated arguments into individual item ids."""
    ids = []
    for value in values:
        ids.extend(part for part in value.replace(",", " ").split() if part)
    return ids


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ebay-shopping",
        description="eBay Shopping API client - issue a single Shopping API call",
    )
    parser.add_argument("--env", "-e", default="./.env", help="Path to .env file")
    parser.add_argument("--debug", action="store_true", help="Enable debug output")
    parser.add_argument("--sandbox", action="store_true", help="Use the sandbox endpoint")
    parser.add_argument("--site", help="Site id override (e.g. 3 for eBay UK)")
    parser.add_argument("--version", "-v", action="store_true", help="Show version and exit")

    sub = parser.add_subparsers(dest="command")

    sub.add_parser("time", help="GeteBayTime")

    category = sub.add_parser("category", help="GetCategoryInfo")
    category.add_argument("category_id", help="Category id (-1 for the root)")
    category.add_argument("--children", action="store_true", help="Include child categories")

    status = sub.add_parser("status", help="GetItemStatus")
    status.add_argument("item_ids", nargs="+")

    item = sub.add_parser("item", help="GetSingleItem")
    item.add_argument("item_id")
    item.add_argument("--selector", action="append", default=[],
                      choices=[s.value for s in ItemSelector])

    items = sub.add_parser("items", help="GetMultipleItems")
    items.add_argument("item_ids", nargs="+")
    items.add_argument("--selector", action="append", default=[],
                       choices=[s.value for s in ItemSelector])

    shipping = sub.add_parser("shipping", help="GetShippingCosts")
    shipping.add_argument("item_id")
    shipping.add_argument("--country", help="Destination country code")
    shipping.add_argument("--postal-code", help="Destination postal code")
    shipping.add_argument("--quantity", type=int, help="Quantity sold")
    shipping.add_argument("--details", action="store_true", help="Include shipping details")

    user = sub.add_parser("user", help="GetUserProfile")
    user.add_argument("user_id")
    user.add_argument("--selector", action="append", default=[],
                      choices=[s.value for s in UserProfileSelector])

    products = sub.add_parser("products", help="FindProducts")
    products.add_argument("keywords")
    products.add_argument("--max-entries", type=int, default=DEFAULT_ITEMS_PER_PAGE)
    products.add_argument("--page", type=int, default=1)

    return parser


def build_request(service: ShoppingService, args):
    """Translate parsed arguments into a populated request builder."""
    if args.command == "time":
        return service.new_get_ebay_time_request()
    if args.command == "category":
        request = service.new_get_category_info_request(args.category_id)
        if args.children:
            request.with_include_selector("ChildCategories")
        return request
    if args.command == "status":
        return service.new_get_item_status_request().with_item_ids(*item_ids_from(args.item_ids))
    if args.command == "item":
        return (
            service.new_get_single_item_request()
            .with_item_id(args.item_id)
            .with_include_selector(*args.selector)
        )
    if args.command == "items":
        return (
            service.new_get_multiple_items_request()
            .with_item_ids(*item_ids_from(args.item_ids))
            .with_include_selector(*args.selector)
        )
    if args.command == "shipping":
        request = service.new_get_shipping_costs_request().with_item_id(args.item_id)
        if args.country:
            request.with_destination_country_code(args.country)
        if args.postal_code:
            request.with_destination_postal_code(args.postal_code)
        if args.quantity is not None:
            request.with_quantity_sold(args.quantity)
        if args.details:
            request.with_include_details(True)
        return request
    if args.command == "user":
        return (
            service.new_get_user_profile_request()
            .with_user_id(args.user_id)
            .with_include_selector(*args.selector)
        )
    if args.command == "products":
        return (
            service.new_find_products_request()
            .with_query_keywords(args.keywords)
            .with_max_entries(args.max_entries)
            .with_page_number(args.page)
        )
    raise ValueError(f"Unknown command: {args.command}")


def summarize(response) -> List[str]:
    """Human-readable lines describing a response envelope and its payload."""
    lines = [
        f"Ack:       {response.ack}",
        f"Timestamp: {response.timestamp}",
        f"Build:     {response.build} (version {response.version})",
    ]
    for error in response.errors:
        lines.append(f"  [{error.severity}] {error.code}: {error.short_message}")

    if hasattr(response, "products"):
        lines.append(f"Products:  {len(response.products)} of {response.total_products}")
        lines.extend(f"  - {p.title}" for p in response.products)
    if hasattr(response, "categories"):
        lines.append(f"Categories: {len(response.categories)} (version {response.category_version})")
        lines.extend(f"  - {c.category_id}: {c.category_name_path}" for c in response.categories)
    if hasattr(response, "items"):
        lines.append(f"Items:     {len(response.items)}")
        lines.extend(f"  - {i.item_id}: {i.listing_status}" for i in response.items)
    if hasattr(response, "item"):
        item = response.item
        lines.append(f"Item:      {item.item_id} {item.title}")
        lines.append(
            f"Price:     {item.current_price.value} {item.current_price.currency_id}"
            f" ({item.listing_status})"
        )
    if hasattr(response, "shipping_cost_summary"):
        summary = response.shipping_cost_summary
        lines.append(
            f"Shipping:  {summary.shipping_service_name} "
            f"{summary.shipping_service_cost.value} {summary.shipping_service_cost.currency_id}"
        )
    if hasattr(response, "user"):
        user = response.user
        lines.append(f"User:      {user.user_id} (feedback {user.feedback_score}, {user.status})")
    return lines


def main(argv=None):
    """Parse CLI arguments and issue one Shopping API call."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"ebay-shopping {__version__}")
        sys.exit(0)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        )
        logging.getLogger("urllib3").setLevel(logging.DEBUG)

    try:
        service = ShoppingService.from_env(args.env)
        if args.sandbox:
            service.with_endpoint("sandbox")
        if args.site:
            service.with_site_id(args.site)
    except ValueError as e:
        print(f"Configuration error: {e}")
        sys.exit(1)

    if not service.config.token:
        print("Missing EBAY_IAF_TOKEN (set it in the environment or the .env file)")
        sys.exit(1)

    request = build_request(service, args)
    print(f"\n{'='*60}")
    print(f"{request.OPERATION.value} -> {service.config.endpoint} (site {service.config.site_id.value})")
    print("="*60)

    try:
        response = request.execute()
    except RemoteCallFailed as e:
        print(f"ERROR: HTTP {e.status_code}")
        print(e.body)
        sys.exit(1)
    except ShoppingAPIError as e:
        print(f"ERROR: {e}")
        sys.exit(1)

    for line in summarize(response):
        print(line)

    if response.ack == AckCode.FAILURE:
        sys.exit(1)


if __name__ == "__main__":
    main()
