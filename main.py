# main.py

"""Entry point for the product_lookup barcode resolver CLI."""

import argparse
import asyncio
import logging
import sys

from product_lookup.config.logging_config import setup_logging
from product_lookup.config.settings import Settings

logger = logging.getLogger("product_lookup.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    order = " > ".join(
        ["local"] + [s["id"] for s in Settings.AVAILABLE_SOURCES]
    )

    parser = argparse.ArgumentParser(
        prog="product_lookup",
        description="Resolve scanned barcodes to product details.",
        epilog=f"Lookup order: {order}",
    )
    parser.add_argument(
        "barcodes",
        nargs="*",
        help="One or more barcodes to resolve.",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["json", "table"],
        default="json",
        dest="output_format",
        help="Output format (default: json).",
    )
    parser.add_argument(
        "--db",
        default=None,
        dest="db_path",
        help="Local inventory database (default: data/inventory.db).",
    )
    parser.add_argument(
        "--save",
        action="store_true",
        default=False,
        help="Save catalog hits to local inventory for future scans.",
    )
    parser.add_argument(
        "--add",
        default=None,
        metavar="BARCODE",
        help="Save a manually entered product under BARCODE.",
    )
    parser.add_argument("--name", default="", help="Product name for --add.")
    parser.add_argument("--brand", default="", help="Brand for --add.")
    parser.add_argument(
        "--price", type=float, default=None, help="Price for --add."
    )
    parser.add_argument(
        "--category", default="", help="Category for --add."
    )
    parser.add_argument(
        "--description", default="", help="Description for --add."
    )
    parser.add_argument(
        "--list",
        action="store_true",
        default=False,
        dest="list_items",
        help="List the local inventory.",
    )
    parser.add_argument(
        "--shop",
        default=None,
        dest="shop_id",
        help="Restrict --list to one shop.",
    )
    parser.add_argument(
        "--health",
        action="store_true",
        default=False,
        help="Run a connectivity health check on all catalogs.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Echo INFO logs to stderr.",
    )
    return parser


def _run_lookup(args: argparse.Namespace) -> None:
    """Resolve the given barcodes and exit."""
    from product_lookup.cli.runner import cli_lookup

    exit_code = asyncio.run(
        cli_lookup(
            barcodes=args.barcodes,
            output_format=args.output_format,
            db_path=args.db_path,
            save=args.save,
        )
    )
    sys.exit(exit_code)


def _run_add(args: argparse.Namespace) -> None:
    """Save a manual entry and exit."""
    from product_lookup.cli.runner import run_add_product

    exit_code = run_add_product(
        barcode=args.add,
        name=args.name,
        brand=args.brand,
        price=args.price,
        category=args.category,
        description=args.description,
        db_path=args.db_path,
    )
    sys.exit(exit_code)


def _run_list(args: argparse.Namespace) -> None:
    """Print local inventory and exit."""
    from product_lookup.cli.runner import run_list_items

    exit_code = run_list_items(
        output_format=args.output_format,
        db_path=args.db_path,
        shop_id=args.shop_id,
    )
    sys.exit(exit_code)


def _run_health_check() -> None:
    """Run catalog connectivity health check."""
    from product_lookup.cli.runner import run_health_check

    exit_code = asyncio.run(run_health_check())
    sys.exit(exit_code)


def main() -> None:
    """Route to lookup, manual add, listing or health check."""
    parser = _build_parser()
    args = parser.parse_args()

    log_file = setup_logging(
        console_level=logging.INFO if args.verbose else logging.WARNING
    )
    logger.info("product_lookup starting, log file: %s", log_file)

    if args.health:
        _run_health_check()
    elif args.add is not None:
        _run_add(args)
    elif args.list_items:
        _run_list(args)
    elif args.barcodes:
        _run_lookup(args)
    else:
        parser.print_usage(sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
