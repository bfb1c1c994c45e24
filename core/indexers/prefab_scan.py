#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Prefab discovery + per-file record extraction.

Extraction of individual files is independent, so it may run on a bounded
thread pool. Outcomes are collected in discovery order regardless of the
worker count.
"""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterator, List, Optional, Tuple, Union

from core.errors import MalformedRecordError
from core.parsers.prefab import PrefabParser, PrefabRecords
from core.schemas.items import ItemRecord, RecipeRecord

__all__ = [
    "FileFailure",
    "PrefabScanResult",
    "extract_prefab_file",
    "iter_prefab_files",
    "scan_prefabs",
]

logger = logging.getLogger(__name__)

ProgressFn = Callable[[int, int], None]


@dataclass(frozen=True)
class FileFailure:
    path: str
    error: str


@dataclass
class PrefabScanResult:
    items: List[ItemRecord] = field(default_factory=list)
    recipes: List[RecipeRecord] = field(default_factory=list)
    failures: List[FileFailure] = field(default_factory=list)
    files_scanned: int = 0


def iter_prefab_files(root: Union[str, Path], suffix: str = ".prefab") -> Iterator[Path]:
    """Yield files under ``root`` whose name ends with ``suffix`` (depth-first).

    A missing root yields nothing.
    """
    base = Path(root)
    if not base.is_dir():
        logger.info("Prefab root not found: %s", base)
        return
    for dirpath, dirnames, filenames in os.walk(base):
        dirnames.sort()
        for name in sorted(filenames):
            if name.endswith(suffix):
                yield Path(dirpath) / name


def extract_prefab_file(
    path: Union[str, Path],
    suffix: str = ".prefab",
) -> Tuple[Optional[PrefabRecords], Optional[FileFailure]]:
    """Parse one file. Failures are returned, never raised."""
    p = Path(path)
    try:
        content = p.read_text(encoding="utf-8", errors="replace")
        return PrefabParser(content, path=str(p), suffix=suffix).parse(), None
    except (OSError, MalformedRecordError) as exc:
        logger.warning("Skipping prefab %s: %s", p.name, exc)
        return None, FileFailure(path=str(p), error=str(exc))


def scan_prefabs(
    root: Union[str, Path],
    *,
    suffix: str = ".prefab",
    workers: int = 1,
    progress: Optional[ProgressFn] = None,
) -> PrefabScanResult:
    paths = list(iter_prefab_files(root, suffix))
    total = len(paths)
    result = PrefabScanResult(files_scanned=total)
    if not paths:
        return result

    def _one(p: Path) -> Tuple[Path, Optional[PrefabRecords], Optional[FileFailure]]:
        records, failure = extract_prefab_file(p, suffix)
        return p, records, failure

    outcomes: List[Tuple[Path, Optional[PrefabRecords], Optional[FileFailure]]] = []
    if workers <= 1:
        for p in paths:
            outcomes.append(_one(p))
            if progress:
                progress(len(outcomes), total)
    else:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            for outcome in pool.map(_one, paths):
                outcomes.append(outcome)
                if progress:
                    progress(len(outcomes), total)

    for _, records, failure in outcomes:
        if failure is not None:
            result.failures.append(failure)
            continue
        if records is None:
            continue
        if records.item is not None:
            result.items.append(records.item)
        if records.recipe is not None:
            result.recipes.append(records.recipe)

    logger.info(
        "Extracted %d items and %d recipes from %d prefab files (%d failed)",
        len(result.items),
        len(result.recipes),
        total,
        len(result.failures),
    )
    return result
