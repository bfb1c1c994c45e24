#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Merge prefab-derived and JSON-derived items by ``item_id``.

Field-level override: every field the JSON file declared replaces the prefab
value; undeclared fields keep the prefab value. Prefab-only items pass through,
JSON-only items are appended. Each item_id appears exactly once.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import replace
from typing import Dict, Iterable, List, Sequence

from core.schemas.items import ORIGIN_MERGED, ItemRecord

__all__ = ["dedupe_by_item_id", "merge_items", "merge_record", "shortname_collisions"]

logger = logging.getLogger(__name__)

# never taken from the override side
_PROTECTED = frozenset({"item_id", "object_ref", "ingredients", "origin", "source_file", "provided_fields"})


def dedupe_by_item_id(items: Iterable[ItemRecord], label: str = "") -> List[ItemRecord]:
    """Keep the first record per item_id."""
    out: List[ItemRecord] = []
    seen: Dict[int, ItemRecord] = {}
    for item in items:
        first = seen.get(item.item_id)
        if first is not None:
            logger.warning(
                "Duplicate %sitemid %s (%s, %s); keeping %s",
                f"{label} " if label else "",
                item.item_id,
                first.source_file,
                item.source_file,
                first.source_file,
            )
            continue
        seen[item.item_id] = item
        out.append(item)
    return out


def merge_record(base: ItemRecord, override: ItemRecord) -> ItemRecord:
    changes = {
        attr: getattr(override, attr)
        for attr in override.provided_fields
        if attr not in _PROTECTED
    }
    return replace(
        base,
        origin=ORIGIN_MERGED,
        provided_fields=base.provided_fields | override.provided_fields,
        **changes,
    )


def merge_items(prefab_items: Sequence[ItemRecord], json_items: Sequence[ItemRecord]) -> List[ItemRecord]:
    prefab_unique = dedupe_by_item_id(prefab_items, "prefab")
    json_unique = dedupe_by_item_id(json_items, "json")
    json_by_id = {item.item_id: item for item in json_unique}

    out: List[ItemRecord] = []
    merged = 0
    for item in prefab_unique:
        override = json_by_id.get(item.item_id)
        if override is None:
            out.append(item)
            continue
        out.append(merge_record(item, override))
        merged += 1

    existing = {item.item_id for item in prefab_unique}
    appended = [item for item in json_unique if item.item_id not in existing]
    out.extend(appended)

    for shortname, count in shortname_collisions(out).items():
        logger.warning("Shortname %r is shared by %d distinct itemids", shortname, count)

    logger.info(
        "Merged items: %d total (%d merged, %d json-only)",
        len(out),
        merged,
        len(appended),
    )
    return out


def shortname_collisions(items: Iterable[ItemRecord]) -> Dict[str, int]:
    counts = Counter(item.shortname for item in items)
    return {name: n for name, n in counts.items() if n > 1}
