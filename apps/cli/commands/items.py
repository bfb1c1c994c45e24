#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""apps/cli/commands/items.py

Query front-end for the built item dataset.

Notes
- This module is a thin UI layer over core.item_store.ItemStore.
- Build the dataset first: `rustitems build`.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

PROJECT_ROOT = Path(__file__).resolve().parents[3]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from rich.console import Console  # noqa: E402
from rich.panel import Panel  # noqa: E402
from rich.table import Table  # noqa: E402

from apps.cli.cli_common import fmt_value, human_mtime, human_size, file_info  # noqa: E402
from core.config import resolve_config  # noqa: E402
from core.errors import ExtractionError  # noqa: E402
from core.item_store import ItemStore, ItemStoreError  # noqa: E402

console = Console()


def _ingredient_label(ing: Dict[str, Any]) -> str:
    name = ing.get("resolvedShortname")
    if name:
        return f"[cyan]{name}[/cyan] [dim]({ing.get('resolvedDisplayName')})[/dim]"
    return f"[red]unresolved[/red] [dim]ref={ing.get('targetRef')}[/dim]"


def _render_item(store: ItemStore, item: Dict[str, Any]) -> None:
    grid = Table.grid(expand=True)
    grid.add_column()
    grid.add_column(justify="right")

    grid.add_row(
        f"[bold gold1]{item.get('displayName')}[/bold gold1] [dim]{item.get('shortname')}[/dim]",
        f"[dim]{item.get('categoryName') or '-'}[/dim]",
    )
    grid.add_row(f"[bold]itemid:[/bold] {item.get('itemId')}", f"[dim]origin: {item.get('origin')}[/dim]")
    if item.get("description"):
        grid.add_row(f"[italic]{item.get('description')}[/italic]", "")
    grid.add_row(
        f"[bold]stack:[/bold] {fmt_value(item.get('stackable'))}  "
        f"[bold]volume:[/bold] {fmt_value(item.get('volume'))}  "
        f"[bold]maxDraggable:[/bold] {fmt_value(item.get('maxDraggable'))}",
        "",
    )

    ingredients = item.get("ingredients") or []
    if ingredients:
        grid.add_row(
            f"\n[bold]Recipe:[/bold] {fmt_value(item.get('craftTimeSeconds'))}s -> "
            f"x{fmt_value(item.get('outputQuantity'))}, workbench {fmt_value(item.get('minWorkbenchTier'))}",
            "",
        )
        for ing in ingredients:
            grid.add_row(f"  • {_ingredient_label(ing)}", f"[yellow]x{ing.get('quantity')}[/yellow]")
    else:
        grid.add_row("\n[dim]No crafting recipe[/dim]", "")

    used = store.used_in(str(item.get("shortname")))
    if used:
        grid.add_row(f"\n[bold]Used in:[/bold] {', '.join(used)}", "")

    console.print(Panel(grid, title="🛠️  Item", border_style="gold1"))


def _render_item_list(title: str, page: Dict[str, Any]) -> None:
    rows: List[Dict[str, Any]] = page.get("items") or []
    if not rows:
        console.print(f"[yellow]No results: {title}[/yellow]")
        return

    table = Table(title=f"{title} ({page.get('total')})", box=None, show_header=True, header_style="bold dim")
    table.add_column("No.", justify="right", style="dim", width=5)
    table.add_column("ItemId", justify="right", style="dim")
    table.add_column("Shortname", style="cyan")
    table.add_column("Name")
    table.add_column("Category", style="dim")
    table.add_column("Ingredients", justify="right")

    offset = int(page.get("offset") or 0)
    for i, row in enumerate(rows, start=offset + 1):
        table.add_row(
            str(i),
            fmt_value(row.get("itemId")),
            str(row.get("shortname")),
            str(row.get("displayName")),
            fmt_value(row.get("categoryName")),
            str(len(row.get("ingredients") or [])),
        )
    console.print(Panel(table, border_style="blue"))
    shown_end = offset + len(rows)
    if shown_end < int(page.get("total") or 0):
        console.print(f"[dim]... showing {offset + 1}-{shown_end}; use --offset for more[/dim]")


def cmd_show(store: ItemStore, args: argparse.Namespace) -> int:
    key = str(args.key).strip()
    item = store.get(key)
    if item is None and key.lstrip("-").isdigit():
        item = store.get_by_id(int(key))
    if item is None:
        console.print(f"[red]Item not found: {key}[/red]")
        return 1
    _render_item(store, item)
    return 0


def cmd_list(store: ItemStore, args: argparse.Namespace) -> int:
    page = store.list(category=args.category, has_crafting=args.crafting, limit=args.limit, offset=args.offset)
    title = "Items"
    if args.category is not None:
        title += f" | category={args.category}"
    if args.crafting is not None:
        title += f" | crafting={'yes' if args.crafting else 'no'}"
    _render_item_list(title, page)
    return 0


def cmd_crafting(store: ItemStore, args: argparse.Namespace) -> int:
    _render_item_list("Craftable items", store.crafting(limit=args.limit, offset=args.offset))
    return 0


def cmd_categories(store: ItemStore, args: argparse.Namespace) -> int:
    rows = store.categories()
    table = Table(title=f"Categories ({len(rows)})", box=None, show_header=True, header_style="bold dim")
    table.add_column("Id", justify="right", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Items", justify="right")
    for row in rows:
        table.add_row(str(row["id"]), str(row["name"]), str(row["count"]))
    console.print(Panel(table, border_style="blue"))
    return 0


def cmd_used_in(store: ItemStore, args: argparse.Namespace) -> int:
    names = store.used_in(args.shortname)
    if not names:
        console.print(f"[yellow]No recipe uses: {args.shortname}[/yellow]")
        return 0
    table = Table(title=f"Recipes using {args.shortname} ({len(names)})", box=None, header_style="bold dim")
    table.add_column("No.", justify="right", style="dim", width=4)
    table.add_column("Item", style="cyan")
    for i, nm in enumerate(names, start=1):
        table.add_row(str(i), nm)
    console.print(Panel(table, border_style="blue"))
    return 0


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="rustitems items", description="Query the built item dataset")
    p.add_argument("--dataset", default=None, help="Dataset JSON (default: OUTPUT_DIR/ITEMS_FILE from config)")
    p.add_argument("--config", default=None, help="Settings INI path")
    sub = p.add_subparsers(dest="cmd")

    sp = sub.add_parser("show", help="Show one item by shortname or itemid")
    sp.add_argument("key")
    sp.set_defaults(func=cmd_show)

    sp = sub.add_parser("list", help="List items")
    sp.add_argument("--category", type=int, default=None)
    grp = sp.add_mutually_exclusive_group()
    grp.add_argument("--crafting", dest="crafting", action="store_const", const=True, default=None)
    grp.add_argument("--no-crafting", dest="crafting", action="store_const", const=False)
    sp.add_argument("--limit", type=int, default=50)
    sp.add_argument("--offset", type=int, default=0)
    sp.set_defaults(func=cmd_list)

    sp = sub.add_parser("crafting", help="List items that have a recipe")
    sp.add_argument("--limit", type=int, default=50)
    sp.add_argument("--offset", type=int, default=0)
    sp.set_defaults(func=cmd_crafting)

    sp = sub.add_parser("categories", help="Category counts")
    sp.set_defaults(func=cmd_categories)

    sp = sub.add_parser("used-in", help="Items whose recipe uses SHORTNAME")
    sp.add_argument("shortname")
    sp.set_defaults(func=cmd_used_in)
    return p


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv if argv is not None else sys.argv[1:])

    try:
        dataset = Path(args.dataset) if args.dataset else resolve_config(config_path=args.config).items_path
        store = ItemStore(dataset)
    except (ExtractionError, ItemStoreError) as exc:
        console.print(f"[red]{exc}[/red]")
        console.print("[dim]Hint: run `rustitems build` first.[/dim]")
        return 1

    if not getattr(args, "func", None):
        info = file_info(store.path)
        console.print(
            f"[bold cyan]{store.path}[/bold cyan]  {len(store)} items, "
            f"{human_size(info['size'])}, {human_mtime(info['mtime'])}"
        )
        parser.print_help()
        return 0
    return int(args.func(store, args))


if __name__ == "__main__":
    raise SystemExit(main())
