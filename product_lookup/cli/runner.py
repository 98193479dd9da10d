# product_lookup/cli/runner.py

"""Headless CLI runner: resolve barcodes, save manual entries, health."""

import json
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table

from product_lookup.config.settings import Settings
from product_lookup.models.product import ProductRecord, ProductSource
from product_lookup.services.product_resolver import (
    ProductResolver,
    build_default_probes,
)
from product_lookup.storage.inventory_store import InventoryStore
from product_lookup.storage.lookup_cache import LookupCache

logger = logging.getLogger("product_lookup.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)

_LABELS = {src["id"]: src["label"] for src in Settings.AVAILABLE_SOURCES}


def _print_table(
    results: list[tuple[str, ProductRecord]],
) -> None:
    """Render a Rich table of resolved records to stdout."""
    table = Table(
        title="Barcode Lookup",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("Barcode", style="bold")
    table.add_column("Name", max_width=50)
    table.add_column("Brand", max_width=30)
    table.add_column("Category")
    table.add_column("Price", justify="right", style="green")
    table.add_column("Source", style="magenta")

    for barcode, record in results:
        price_str = (
            f"{record.price:,.2f}" if record.price is not None else "—"
        )
        table.add_row(
            barcode,
            record.name or "[yellow]not found[/yellow]",
            record.brand or "—",
            record.category or "—",
            price_str,
            record.source.value,
        )

    Console().print(table)


async def cli_lookup(
    barcodes: list[str],
    output_format: str,
    db_path: str | None,
    save: bool,
) -> int:
    """Resolve each barcode and return an exit code (0=all found)."""
    store = InventoryStore(Path(db_path) if db_path else None)
    save_back = save or Settings.AUTO_SAVE_EXTERNAL_HITS
    resolver = ProductResolver(
        build_default_probes(),
        cache=LookupCache(),
        on_external_hit=store.save_record if save_back else None,
    )

    results: list[tuple[str, ProductRecord]] = []
    try:
        for barcode in barcodes:
            _err.print(f"[bold]Looking up:[/bold] {barcode}")
            record = await resolver.resolve(
                barcode, store.lookup_by_barcode
            )
            if record.found:
                origin = (
                    "your inventory"
                    if record.source is ProductSource.LOCAL
                    else _LABELS.get(record.source.value, record.source.value)
                )
                _err.print(f"[green]✓ Found via {origin}[/green]")
            else:
                _err.print(
                    "[yellow]Not found, enter the details manually "
                    "with --add to save it for future scans.[/yellow]"
                )
            results.append((barcode, record))
        await resolver.wait_for_saves()
    finally:
        store.close()

    if output_format == "table":
        _print_table(results)
    else:
        json.dump(
            {barcode: record.to_dict() for barcode, record in results},
            sys.stdout,
            ensure_ascii=False,
            indent=2,
        )
        sys.stdout.write("\n")

    return 0 if all(r.found for _, r in results) else 1


def run_add_product(
    barcode: str,
    name: str,
    brand: str,
    price: float | None,
    category: str,
    description: str,
    db_path: str | None,
) -> int:
    """Save a manually entered product to local inventory."""
    if price is not None and price < 0:
        _err.print("[red]Price must not be negative.[/red]")
        return 1

    store = InventoryStore(Path(db_path) if db_path else None)
    try:
        ok = store.save_product(
            barcode,
            name=name,
            brand=brand,
            price=price,
            category=category,
            description=description,
        )
    finally:
        store.close()

    if not ok:
        _err.print(f"[red]Could not save {barcode}.[/red]")
        return 1
    _err.print(
        f"[green]✓ Saved {barcode}. Next time you scan it, "
        "the details will be filled in automatically.[/green]"
    )
    return 0


def run_list_items(
    output_format: str,
    db_path: str | None,
    shop_id: str | None,
) -> int:
    """Print the local inventory, optionally for one shop."""
    store = InventoryStore(Path(db_path) if db_path else None)
    try:
        items = store.list_items(shop_id)
    finally:
        store.close()

    if output_format == "table":
        table = Table(
            title="Local Inventory",
            show_lines=True,
            title_style="bold cyan",
        )
        table.add_column("Barcode", style="bold")
        table.add_column("Name", max_width=50)
        table.add_column("Brand", max_width=30)
        table.add_column("Category")
        table.add_column("Price", justify="right", style="green")
        table.add_column("Shop", style="dim")
        for item in items:
            table.add_row(
                item.barcode,
                item.name,
                item.brand or "—",
                item.category or "—",
                f"{item.price:,.2f}" if item.price is not None else "—",
                item.shop_id,
            )
        Console().print(table)
    else:
        json.dump(
            [
                {
                    "barcode": item.barcode,
                    "shopId": item.shop_id,
                    "name": item.name,
                    "brand": item.brand,
                    "price": item.price,
                    "category": item.category,
                    "description": item.description,
                    "imageUrl": item.image_url,
                    "inStock": item.in_stock,
                    "updatedAt": item.updated_at.isoformat(),
                }
                for item in items
            ],
            sys.stdout,
            ensure_ascii=False,
            indent=2,
        )
        sys.stdout.write("\n")

    _err.print(f"{len(items)} item(s) in local inventory")
    return 0


async def run_health_check() -> int:
    """Run connectivity health check on all catalogs."""
    from product_lookup.services.health_checker import HealthChecker

    _err.print("[bold]Running catalog health check...[/bold]")
    checker = HealthChecker()
    results = await checker.check_all()

    table = Table(
        title="Catalog Health Check",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("Source", style="bold")
    table.add_column("Status", justify="center")
    table.add_column("Latency", justify="right")
    table.add_column("Notes", style="dim")

    any_down = False
    for r in results:
        if r.status == "ok":
            status = "[green]✅ OK[/green]"
        elif r.status == "slow":
            status = "[yellow]⚠️  SLOW[/yellow]"
        else:
            status = "[red]❌ DOWN[/red]"
            any_down = True

        latency = (
            f"{r.latency_ms:.0f}ms"
            if r.latency_ms > 0
            else "—"
        )
        table.add_row(
            r.label, status, latency, r.message,
        )

    Console().print(table)
    return 1 if any_down else 0
