#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Dataset writer: item list + extraction summary (+ optional markdown report)."""

from __future__ import annotations

import json
import os
from collections import Counter
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from core.categories import category_name
from core.errors import DatasetWriteError
from core.schemas.items import ItemRecord

__all__ = [
    "build_summary",
    "category_counts",
    "render_summary_markdown",
    "write_dataset",
    "write_json",
    "write_text",
    "write_texts",
]


def build_summary(items: Sequence[ItemRecord], *, meta: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    with_recipes = len([i for i in items if i.has_recipe])
    summary: Dict[str, Any] = {
        "totalItems": len(items),
        "itemsWithRecipes": with_recipes,
        "itemsWithoutRecipes": len(items) - with_recipes,
        "categories": sorted({i.category_id for i in items if i.category_id is not None}),
    }
    if meta:
        summary["meta"] = meta
    return summary


def category_counts(items: Iterable[Any]) -> List[Dict[str, Any]]:
    """[{id, name, count}] sorted by id; items without a category are skipped.

    Accepts ItemRecord objects or their serialized dicts.
    """
    counts: Counter = Counter()
    for item in items:
        code = item.get("categoryId") if isinstance(item, dict) else item.category_id
        if code is None:
            continue
        counts[int(code)] += 1
    return [{"id": code, "name": category_name(code), "count": counts[code]} for code in sorted(counts)]


def _dump_json(doc: Any, path: Path) -> str:
    try:
        return json.dumps(doc, ensure_ascii=False, indent=2, allow_nan=False) + "\n"
    except ValueError as exc:
        raise DatasetWriteError(f"Cannot serialize {path}: {exc}") from exc


def write_texts(files: Sequence[Tuple[Path, str]]) -> List[Path]:
    """Write every file to a temporary sibling first, then replace them in order.

    A failure while staging leaves all existing outputs untouched.
    """
    staged: List[Tuple[Path, Path]] = []
    try:
        for path, text in files:
            p = Path(path)
            tmp = p.with_name(p.name + ".tmp")
            p.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(text, encoding="utf-8")
            staged.append((tmp, p))
        for tmp, p in staged:
            os.replace(tmp, p)
    except OSError as exc:
        for tmp, _ in staged:
            if tmp.exists():
                tmp.unlink()
        raise DatasetWriteError(f"Cannot write {path}: {exc}") from exc
    return [p for _, p in staged]


def write_text(path: Path, text: str) -> Path:
    """Write via a temporary sibling + replace, so readers never see a partial file."""
    return write_texts([(Path(path), text)])[0]


def write_json(path: Path, doc: Any) -> Path:
    return write_text(path, _dump_json(doc, path))


def write_dataset(
    items: Sequence[ItemRecord],
    items_path: Path,
    summary_path: Path,
    *,
    meta: Optional[Dict[str, Any]] = None,
) -> Tuple[Path, Dict[str, Any]]:
    """Persist items and their summary. Returns (items_path, summary).

    Both documents are serialized before either file is touched.
    """
    summary = build_summary(items, meta=meta)
    items_text = _dump_json([item.to_dict() for item in items], items_path)
    summary_text = _dump_json(summary, summary_path)
    write_texts([(Path(items_path), items_text), (Path(summary_path), summary_text)])
    return Path(items_path), summary


def render_summary_markdown(
    summary: Dict[str, Any],
    *,
    items: Sequence[ItemRecord] = (),
    failures: Iterable[Any] = (),
    unresolved_refs: int = 0,
) -> str:
    meta = summary.get("meta") or {}
    lines = []
    lines.append("# Item Extraction Summary")
    lines.append("")
    lines.append("## Meta")
    lines.append("```yaml")
    lines.append(f"schema: {meta.get('schema')}")
    lines.append(f"generated: {meta.get('generated')}")
    lines.append(f"project_version: {meta.get('project_version')}")
    for k, v in (meta.get("sources") or {}).items():
        lines.append(f"{k}: {v}")
    lines.append("```")
    lines.append("")
    lines.append("## Counts")
    lines.append("```yaml")
    for k in ("totalItems", "itemsWithRecipes", "itemsWithoutRecipes"):
        lines.append(f"{k}: {summary.get(k)}")
    lines.append(f"unresolvedIngredients: {unresolved_refs}")
    lines.append("```")

    cats = category_counts(items)
    if cats:
        lines.append("")
        lines.append("## Categories")
        lines.append("| Id | Name | Items |")
        lines.append("|----|------|-------|")
        for row in cats:
            lines.append(f"| {row['id']} | {row['name']} | {row['count']} |")

    failed = list(failures)
    if failed:
        lines.append("")
        lines.append(f"## Failed Files ({len(failed)})")
        for f in failed:
            lines.append(f"- `{Path(f.path).name}`: {f.error}")
    return "\n".join(lines) + "\n"
