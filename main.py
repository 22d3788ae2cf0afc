# main.py

"""Entry point for the storefront command-line client."""

import argparse
import asyncio
import logging
import sys

from src.config.logging_config import setup_logging
from src.config.settings import Settings

logger = logging.getLogger("storefront.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    valid_ids = ", ".join(c["id"] or "all" for c in Settings.CATEGORIES)

    parser = argparse.ArgumentParser(
        prog="storefront",
        description="Browse and search the store catalog.",
        epilog=f"Available categories: {valid_ids}",
    )
    # Each view is selected by exactly one of these
    view = parser.add_mutually_exclusive_group()
    view.add_argument(
        "-c",
        "--category",
        default=None,
        help="Browse one category (default: all products).",
    )
    view.add_argument(
        "-p",
        "--product",
        type=int,
        default=None,
        dest="product_id",
        help="Show the details of one product.",
    )
    view.add_argument(
        "--categories",
        action="store_true",
        default=False,
        help="List the browsable categories.",
    )
    parser.add_argument(
        "-q",
        "--search",
        default=None,
        dest="query",
        help="Filter the product list by title, brand or category.",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["json", "table"],
        default="table",
        dest="output_format",
        help="Output format (default: table).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Show debug logging on the console.",
    )
    return parser


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse *argv*, rejecting a search outside the product list view."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.query is not None and (
        args.product_id is not None or args.categories
    ):
        parser.error(
            "argument -q/--search: only valid when listing products"
        )
    return args


def _run(args: argparse.Namespace) -> int:
    """Dispatch to the matching CLI runner."""
    from src.cli.runner import cli_detail, cli_list, print_categories

    if args.categories:
        return print_categories()
    if args.product_id is not None:
        return asyncio.run(
            cli_detail(args.product_id, args.output_format)
        )
    return asyncio.run(
        cli_list(args.category, args.query, args.output_format)
    )


def main(argv: list[str] | None = None) -> None:
    """Parse arguments and run the requested view."""
    args = _parse_args(argv)

    log_file = setup_logging(verbose=args.verbose)
    logger.info("storefront starting, log file: %s", log_file)

    try:
        exit_code = _run(args)
    except Exception:
        logger.critical("Fatal error during CLI run", exc_info=True)
        raise
    finally:
        logger.info("storefront shutting down")
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
