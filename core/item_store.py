# -*- coding: utf-8 -*-
from __future__ import annotations

import json
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional

from core.indexers.dataset import category_counts


class ItemStoreError(RuntimeError):
    pass


class ItemStore:
    """Load + index the written item dataset for queries (thread-safe).

    Data source:
      - processed-data/rust_items.json

    The file is re-read when its mtime changes.
    """

    def __init__(self, dataset_path: Path):
        self._path = Path(dataset_path)
        self._lock = threading.RLock()
        self._mtime: float = -1.0

        self._items: List[Dict[str, Any]] = []
        self._by_shortname: Dict[str, Dict[str, Any]] = {}
        self._by_id: Dict[int, Dict[str, Any]] = {}
        self._used_in: Dict[str, List[str]] = {}

        self.load(force=True)

    @property
    def path(self) -> Path:
        return self._path

    def load(self, force: bool = False) -> bool:
        """(Re)load the dataset. Returns True when the file was read."""
        with self._lock:
            if not self._path.exists():
                raise ItemStoreError(f"Dataset not found: {self._path}")
            mtime = self._path.stat().st_mtime
            if not force and mtime == self._mtime:
                return False
            try:
                doc = json.loads(self._path.read_text(encoding="utf-8"))
            except ValueError as exc:
                raise ItemStoreError(f"Dataset is not valid JSON: {self._path}: {exc}") from exc
            if not isinstance(doc, list):
                raise ItemStoreError(f"Dataset must be a JSON array: {self._path}")

            self._items = [row for row in doc if isinstance(row, dict)]
            self._index()
            self._mtime = mtime
            return True

    def _index(self) -> None:
        by_shortname: Dict[str, Dict[str, Any]] = {}
        by_id: Dict[int, Dict[str, Any]] = {}
        used_in: Dict[str, List[str]] = {}
        for row in self._items:
            sn = row.get("shortname")
            if isinstance(sn, str):
                by_shortname.setdefault(sn, row)
            iid = row.get("itemId")
            if isinstance(iid, int):
                by_id.setdefault(iid, row)
            for ing in row.get("ingredients") or []:
                target = ing.get("resolvedShortname")
                if target and isinstance(sn, str):
                    bucket = used_in.setdefault(target, [])
                    if sn not in bucket:
                        bucket.append(sn)
        self._by_shortname = by_shortname
        self._by_id = by_id
        self._used_in = used_in

    def _refresh(self) -> None:
        if self._path.exists():
            self.load()

    # ----------------- queries -----------------

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def get(self, shortname: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            self._refresh()
            return self._by_shortname.get(shortname)

    def get_by_id(self, item_id: int) -> Optional[Dict[str, Any]]:
        with self._lock:
            self._refresh()
            return self._by_id.get(int(item_id))

    def list(
        self,
        *,
        category: Optional[int] = None,
        has_crafting: Optional[bool] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Dict[str, Any]:
        with self._lock:
            self._refresh()
            rows = self._items
            if category is not None:
                rows = [r for r in rows if r.get("categoryId") == int(category)]
            if has_crafting is not None:
                rows = [r for r in rows if bool(r.get("ingredients")) == bool(has_crafting)]
            start = max(int(offset), 0)
            page = rows[start : start + max(int(limit), 0)]
            return {"items": page, "total": len(rows), "limit": int(limit), "offset": start}

    def crafting(self, *, limit: int = 50, offset: int = 0) -> Dict[str, Any]:
        return self.list(has_crafting=True, limit=limit, offset=offset)

    def categories(self) -> List[Dict[str, Any]]:
        with self._lock:
            self._refresh()
            return category_counts(self._items)

    def used_in(self, shortname: str) -> List[str]:
        with self._lock:
            self._refresh()
            return list(self._used_in.get(shortname, []))
