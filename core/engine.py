#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""ExtractionEngine (core)

This module is intentionally UI-agnostic.

Pipeline
- scan prefab exports -> item + recipe records   (core.indexers.prefab_scan)
- load JSON item definitions -> item records     (core.indexers.json_items)
- merge both item sets by itemid                 (core.indexers.merge)
- attach recipes / resolve ingredient refs       (core.indexers.recipes)
- write items + summary                          (core.indexers.dataset)

Each run starts from scratch; the only state is the output files, which are
replaced only after the full item list is computed in memory.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional

from core.config import ExtractConfig, resolve_config
from core.errors import NoItemsFoundError
from core.indexers.dataset import render_summary_markdown, write_dataset, write_text
from core.indexers.json_items import load_json_items
from core.indexers.merge import merge_items
from core.indexers.prefab_scan import FileFailure, scan_prefabs
from core.indexers.recipes import count_unresolved, resolve_recipes
from core.schemas.items import ItemRecord
from core.schemas.meta import build_meta

logger = logging.getLogger(__name__)


@dataclass
class ExtractionResult:
    items: List[ItemRecord] = field(default_factory=list)
    recipes_total: int = 0
    prefab_files: int = 0
    prefab_items: int = 0
    json_files: int = 0
    json_items: int = 0
    unresolved_refs: int = 0
    failures: List[FileFailure] = field(default_factory=list)

    @property
    def with_recipes(self) -> int:
        return len([i for i in self.items if i.has_recipe])

    @property
    def without_recipes(self) -> int:
        return len(self.items) - self.with_recipes


class ExtractionEngine:
    """Main entry used by CLI / devtools.

    Parameters
    - config: resolved ExtractConfig (default: ``resolve_config()``).
    - silent: suppress stage logs (per-file warnings still go to logging).
    - progress: optional callback(done, total) for the prefab scan.
    """

    def __init__(
        self,
        config: Optional[ExtractConfig] = None,
        *,
        silent: bool = False,
        progress: Optional[Callable[[int, int], None]] = None,
    ):
        self.config = config or resolve_config()
        self.silent = bool(silent)
        self.progress = progress

    def _log(self, msg: str) -> None:
        if not self.silent:
            logger.info(msg)

    # --------------------------------------------------------
    # Stages
    # --------------------------------------------------------

    def extract(self) -> ExtractionResult:
        cfg = self.config

        self._log(f"Scanning prefabs in {cfg.export_root} (workers={cfg.workers})")
        scan = scan_prefabs(cfg.export_root, suffix=cfg.prefab_suffix, workers=cfg.workers, progress=self.progress)
        self._log(f"Found {scan.files_scanned} prefab files: {len(scan.items)} items, {len(scan.recipes)} recipes")

        self._log(f"Loading JSON items from {cfg.items_json_dir}")
        loaded = load_json_items(cfg.items_json_dir)
        self._log(f"Found {loaded.files_scanned} JSON files: {len(loaded.items)} items")

        merged = merge_items(scan.items, loaded.items)
        if not merged:
            raise NoItemsFoundError(
                f"No items found (prefabs: {cfg.export_root}, json: {cfg.items_json_dir})"
            )
        self._log(f"Total items after merging: {len(merged)}")

        items = resolve_recipes(merged, scan.recipes)
        result = ExtractionResult(
            items=items,
            recipes_total=len(scan.recipes),
            prefab_files=scan.files_scanned,
            prefab_items=len(scan.items),
            json_files=loaded.files_scanned,
            json_items=len(loaded.items),
            unresolved_refs=count_unresolved(items),
            failures=list(scan.failures) + list(loaded.failures),
        )
        self._log(
            f"Resolved recipes: {result.with_recipes} items with recipes, "
            f"{result.unresolved_refs} unresolved ingredient refs"
        )
        return result

    def write(self, result: ExtractionResult, *, report: bool = True) -> Dict[str, Path]:
        cfg = self.config
        meta = build_meta(
            tool="build_items",
            sources={
                "export_root": str(cfg.export_root),
                "items_json_dir": str(cfg.items_json_dir),
            },
            extra={
                "prefab_files": result.prefab_files,
                "json_files": result.json_files,
                "recipes": result.recipes_total,
                "failures": len(result.failures),
            },
        )
        items_path, summary = write_dataset(result.items, cfg.items_path, cfg.summary_path, meta=meta)
        paths = {"items": items_path, "summary": cfg.summary_path}
        self._log(f"Saved {len(result.items)} items to {items_path}")

        if report:
            text = render_summary_markdown(
                summary,
                items=result.items,
                failures=result.failures,
                unresolved_refs=result.unresolved_refs,
            )
            paths["report"] = write_text(cfg.report_path, text)
        return paths

    def run(self, *, report: bool = True) -> ExtractionResult:
        result = self.extract()
        self.write(result, report=report)
        return result
