#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Build the item dataset (rust_items.json + extraction_summary.json)."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from rich.console import Console  # noqa: E402
from rich.logging import RichHandler  # noqa: E402
from rich.panel import Panel  # noqa: E402
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn  # noqa: E402
from rich.table import Table  # noqa: E402

from core.config import ExtractConfig, resolve_config  # noqa: E402
from core.engine import ExtractionEngine, ExtractionResult  # noqa: E402
from core.errors import ExtractionError  # noqa: E402
from devtools.build_cache import CACHE_NAME, dir_sig, file_sig, load_cache, save_cache  # noqa: E402

console = Console()
CACHE_KEY = "items"


def setup_logging(verbose: bool = False, silent: bool = False) -> None:
    level = logging.DEBUG if verbose else (logging.WARNING if silent else logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _inputs_sig(cfg: ExtractConfig) -> dict:
    return {
        "export_root": dir_sig(cfg.export_root, suffixes=[cfg.prefab_suffix]),
        "items_json_dir": dir_sig(cfg.items_json_dir, suffixes=[".json"], recursive=False),
        "workers": cfg.workers,
    }


def _outputs_sig(cfg: ExtractConfig) -> dict:
    return {"items": file_sig(cfg.items_path), "summary": file_sig(cfg.summary_path)}


def _print_result(result: ExtractionResult, paths: dict) -> None:
    console.print("\n[bold]=== EXTRACTION SUMMARY ===[/bold]")
    console.print(f"Total items: [bold]{len(result.items)}[/bold]")
    console.print(f"Items with crafting recipes: [green]{result.with_recipes}[/green]")
    console.print(f"Items without crafting recipes: [dim]{result.without_recipes}[/dim]")
    console.print(f"Unresolved ingredient refs: [yellow]{result.unresolved_refs}[/yellow]")
    if result.failures:
        console.print(f"Failed files: [red]{len(result.failures)}[/red]")

    table = Table(title="Sample Items", box=None, show_header=True, header_style="bold dim")
    table.add_column("Shortname", style="cyan")
    table.add_column("Name")
    table.add_column("Recipe", style="dim")
    for item in result.items[:10]:
        if item.ingredients:
            ings = ", ".join(f"{ing.quantity}x {ing.resolved_shortname or ing.target_ref}" for ing in item.ingredients)
            recipe = f"{ings} | {item.craft_time_seconds}s -> x{item.output_quantity}"
        else:
            recipe = "No crafting recipe"
        table.add_row(item.shortname, item.display_name, recipe)
    console.print(Panel(table, border_style="blue"))

    for label, path in paths.items():
        console.print(f"[green]✅ {label}: {path}[/green]")


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Build the item dataset from prefab exports + JSON item definitions")
    p.add_argument("--config", default=None, help="Settings INI path (default: conf/settings.ini)")
    p.add_argument("--export-root", default=None, help="Prefab export tree")
    p.add_argument("--items-json-dir", default=None, help="JSON item definition directory")
    p.add_argument("--out-dir", default=None, help="Output directory for the dataset")
    p.add_argument("--report-dir", default=None, help="Output directory for the markdown report")
    p.add_argument("--workers", type=int, default=None, help="Prefab extraction worker threads")
    p.add_argument("--no-report", action="store_true", help="Skip the markdown report")
    p.add_argument("--force", action="store_true", help="Force rebuild even if cache matches")
    p.add_argument("--silent", action="store_true", help="Only log warnings and errors")
    p.add_argument("--verbose", action="store_true", help="Debug logging")

    args = p.parse_args(argv)
    setup_logging(verbose=args.verbose, silent=args.silent)

    try:
        cfg = resolve_config(
            config_path=args.config,
            export_root=args.export_root,
            items_json_dir=args.items_json_dir,
            output_dir=args.out_dir,
            report_dir=args.report_dir,
            workers=args.workers,
        )
    except ExtractionError as exc:
        console.print(f"[red]❌ {exc}[/red]")
        return 1

    cache_path = cfg.output_dir / CACHE_NAME
    inputs_sig = _inputs_sig(cfg)
    cache = load_cache(cache_path)
    if not args.force:
        entry = cache.get(CACHE_KEY) or {}
        if entry.get("signature") == inputs_sig and entry.get("outputs") == _outputs_sig(cfg):
            console.print("✅ Item dataset up-to-date; skip rebuild")
            return 0

    with Progress(
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        console=console,
        transient=True,
        disable=bool(args.silent),
    ) as progress:
        task = progress.add_task("Scanning prefabs...", total=None)

        def _on_file(done: int, total: int) -> None:
            progress.update(task, completed=done, total=total)

        engine = ExtractionEngine(cfg, silent=bool(args.silent), progress=_on_file)
        try:
            result = engine.extract()
        except ExtractionError as exc:
            progress.stop()
            console.print(f"[red]❌ {exc}[/red]")
            return 1

    try:
        paths = engine.write(result, report=not args.no_report)
    except ExtractionError as exc:
        console.print(f"[red]❌ {exc}[/red]")
        return 1

    cache[CACHE_KEY] = {"signature": inputs_sig, "outputs": _outputs_sig(cfg)}
    save_cache(cache, cache_path)

    _print_result(result, paths)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
