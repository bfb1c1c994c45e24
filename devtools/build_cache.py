#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Input/output signatures used to skip unchanged rebuilds."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

CACHE_NAME = ".build_cache.json"


def load_cache(path: Path) -> Dict[str, Any]:
    p = Path(path)
    if not p.exists():
        return {}
    try:
        doc = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return doc if isinstance(doc, dict) else {}


def save_cache(cache: Dict[str, Any], path: Path) -> None:
    p = Path(path)
    try:
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(cache, ensure_ascii=False, indent=2), encoding="utf-8")
    except OSError:
        return


def file_sig(path: Path) -> Dict[str, Any]:
    p = Path(path)
    try:
        st = p.stat()
    except OSError:
        return {"path": str(p), "exists": False}
    return {"path": str(p), "exists": True, "mtime_ns": int(st.st_mtime_ns), "size": int(st.st_size)}


def dir_sig(path: Path, *, suffixes: Optional[Iterable[str]] = None, recursive: bool = True) -> Dict[str, Any]:
    """Aggregate signature (count, newest mtime, total size) of matching files."""
    p = Path(path)
    if not p.is_dir():
        return {"path": str(p), "exists": False}
    wanted = tuple(suffixes or ())
    count = 0
    max_mtime = 0
    total_size = 0
    for fp in (p.rglob("*") if recursive else p.iterdir()):
        if wanted and not fp.name.endswith(wanted):
            continue
        try:
            st = fp.stat()
        except OSError:
            continue
        if not fp.is_file():
            continue
        count += 1
        total_size += int(st.st_size)
        max_mtime = max(max_mtime, int(st.st_mtime_ns))
    return {"path": str(p), "exists": True, "count": count, "max_mtime_ns": max_mtime, "total_size": total_size}
