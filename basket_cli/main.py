"""Basket CLI entry point.

Drives the basket engine from a shell: login/logout, product listing and
search, adding products, showing and clearing the basket, and exporting a
basket report. Basket and session state persist in the local storage file
between invocations.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from basket_engine.catalog.catalog import Catalog, default_catalog, load_catalog
from basket_engine.catalog.search import filter_products
from basket_engine.config import BasketConfig
from basket_engine.errors import BasketError, SessionError
from basket_engine.events import EventLog
from basket_engine.reporting.reporter import BasketReporter, format_money
from basket_engine.session.session import SessionBoundary
from basket_engine.store.basket import BasketStore
from basket_engine.store.repository import JsonFileBasketRepository
from basket_engine.store.storage import LocalStorage


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Basket engine for the demo storefront"
    )
    parser.add_argument(
        "--config-file",
        type=Path,
        default=Path(".basket_config"),
        help="Path to the .basket_config JSON file (default: .basket_config)",
    )
    parser.add_argument(
        "--storage",
        type=Path,
        default=None,
        help="Path to the local storage file (overrides storage_path in config)",
    )
    parser.add_argument(
        "--events",
        action="store_true",
        default=False,
        help="Echo structured [BASKET] events to stderr",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # login subcommand
    login_parser = subparsers.add_parser(
        "login",
        help="Start a shopping session",
        description="Valid credentials come from the config file, or from the"
        " BASKET_USERNAME and BASKET_PASSWORD environment variables when set.",
    )
    login_parser.add_argument("--username", required=True, help="Username")
    login_parser.add_argument("--password", required=True, help="Password")

    # logout subcommand
    subparsers.add_parser("logout", help="Clear the basket and end the session")

    # products subcommand
    products_parser = subparsers.add_parser(
        "products", help="List catalog products, optionally filtered"
    )
    products_parser.add_argument(
        "--search",
        type=str,
        default="",
        help="Case-insensitive text matched against code and description",
    )

    # add subcommand
    add_parser = subparsers.add_parser("add", help="Add products to the basket")
    add_parser.add_argument(
        "codes",
        nargs="+",
        help="Product codes to add (repeat a code to add it again)",
    )

    # show subcommand
    subparsers.add_parser("show", help="Display the basket and its total")

    # clear subcommand
    subparsers.add_parser("clear", help="Remove every item from the basket")

    # report subcommand
    report_parser = subparsers.add_parser("report", help="Write a basket report")
    report_parser.add_argument(
        "--output",
        type=Path,
        required=True,
        help="Path to write the report file",
    )
    report_parser.add_argument(
        "--format",
        choices=["yaml", "json"],
        default="yaml",
        help="Report format (default: yaml)",
    )

    return parser.parse_args(argv)


def _load_config(args: argparse.Namespace) -> BasketConfig:
    return BasketConfig(args.config_file)


def _load_catalog(config: BasketConfig) -> Catalog:
    if config.catalog_path is None:
        return default_catalog()
    return load_catalog(config.catalog_path)


def _build_session(args: argparse.Namespace, config: BasketConfig) -> SessionBoundary:
    """Wire catalog, storage, repository and session from configuration."""
    storage = LocalStorage(args.storage or config.storage_path)
    events = EventLog(sys.stderr if args.events else None)
    return SessionBoundary(
        _load_catalog(config),
        JsonFileBasketRepository(storage),
        username=config.username,
        password=config.password,
        pricing=config.pricing_rule,
        events=events,
        storage=storage,
    )


def _require_basket(session: SessionBoundary) -> BasketStore:
    basket = session.resume()
    if basket is None:
        raise SessionError("No active session; log in first")
    return basket


def cmd_login(args: argparse.Namespace) -> int:
    """Handle login subcommand."""
    session = _build_session(args, _load_config(args))
    session.login(args.username, args.password)
    print(f"Logged in as {args.username}")
    return 0


def cmd_logout(args: argparse.Namespace) -> int:
    """Handle logout subcommand."""
    session = _build_session(args, _load_config(args))
    _require_basket(session)
    user = session.user
    print(session.logout())
    print(f"Logged out {user}")
    return 0


def cmd_products(args: argparse.Namespace) -> int:
    """Handle products subcommand.

    Lists matching products in catalog order. An empty result is not an
    error.
    """
    config = _load_config(args)
    products = filter_products(_load_catalog(config), args.search)
    if not products:
        print("No products found")
        return 0
    for p in products:
        print(
            f"  {p.code}  {p.description}  "
            f"{format_money(p.base_price, config.currency_symbol)}/{p.base_unit}"
            f"  (Qty: {p.available_qty})"
        )
    print(f"\n{len(products)} product(s)")
    return 0


def cmd_add(args: argparse.Namespace) -> int:
    """Handle add subcommand.

    Codes are added in order; the first unknown code stops processing
    with exit code 1, keeping the codes already added.
    """
    basket = _require_basket(_build_session(args, _load_config(args)))
    for code in args.codes:
        print(basket.add(code))
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    """Handle show subcommand."""
    config = _load_config(args)
    basket = _require_basket(_build_session(args, config))
    for line in BasketReporter(basket, config.currency_symbol).lines():
        print(line)
    return 0


def cmd_clear(args: argparse.Namespace) -> int:
    """Handle clear subcommand."""
    basket = _require_basket(_build_session(args, _load_config(args)))
    print(basket.clear())
    return 0


def cmd_report(args: argparse.Namespace) -> int:
    """Handle report subcommand."""
    config = _load_config(args)
    basket = _require_basket(_build_session(args, config))
    reporter = BasketReporter(basket, config.currency_symbol)
    if args.format == "json":
        reporter.write_json(args.output)
    else:
        reporter.write_yaml(args.output)
    print(f"Report written to {args.output}")
    return 0


COMMANDS = {
    "login": cmd_login,
    "logout": cmd_logout,
    "products": cmd_products,
    "add": cmd_add,
    "show": cmd_show,
    "clear": cmd_clear,
    "report": cmd_report,
}


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    if args.command is None:
        parse_args(["--help"])
        return 1

    handler = COMMANDS.get(args.command)
    if handler is None:
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1

    try:
        return handler(args)
    except (BasketError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
