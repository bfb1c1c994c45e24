# -*- coding: utf-8 -*-
"""JSON item-definition parser.

The JSON source uses its own key names (``itemid``, ``Name``, ``Category`` ...)
and is mapped onto the same ItemRecord shape as prefab items.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, Mapping, Optional, Set, Tuple

from core.categories import category_name
from core.errors import MalformedRecordError
from core.parsers.base import BaseParser, to_bool, to_int, to_number
from core.schemas.items import ORIGIN_JSON, ItemRecord

__all__ = ["JSON_FIELD_MAP", "JsonItemParser", "item_from_json"]


def _as_text(raw: Any, field: str, source: Optional[str]) -> str:
    if raw is None:
        return ""
    if isinstance(raw, (dict, list)):
        raise MalformedRecordError(f"{field}: expected text, got {type(raw).__name__}", source=source, field=field)
    return str(raw)


def _as_volume(raw: Any, field: str, source: Optional[str]) -> Any:
    val = to_number(raw, field, source)
    return int(val) if val.is_integer() else val


def _as_any(raw: Any, field: str, source: Optional[str]) -> Any:
    return raw


# json key -> (attribute, converter, default)
JSON_FIELD_MAP: Dict[str, Tuple[str, Callable[[Any, str, Optional[str]], Any], Any]] = {
    "Description": ("description", _as_text, ""),
    "Category": ("category_id", to_int, None),
    "stackable": ("stackable", to_int, 1),
    "volume": ("volume", _as_volume, 0),
    "maxDraggable": ("max_draggable", to_int, 0),
    "ItemType": ("item_type", _as_text, "Generic"),
    "AmountType": ("amount_type", _as_text, "Count"),
    "quickDespawn": ("quick_despawn", to_bool, False),
    "rarity": ("rarity", _as_text, "None"),
    "condition": ("condition", _as_any, None),
    "Parent": ("parent", to_int, 0),
    "isWearable": ("is_wearable", to_bool, False),
    "isHoldable": ("is_holdable", to_bool, False),
    "isUsable": ("is_usable", to_bool, False),
    "HasSkins": ("has_skins", to_bool, False),
}


def _required_text(doc: Mapping[str, Any], key: str, source: Optional[str]) -> str:
    val = doc.get(key)
    if not isinstance(val, str) or not val.strip():
        raise MalformedRecordError(f"missing or empty required key {key!r}", source=source, field=key)
    return val.strip()


def item_from_json(doc: Any, source: Optional[str] = None) -> ItemRecord:
    """Build an ItemRecord from one decoded JSON item definition."""
    if not isinstance(doc, dict):
        raise MalformedRecordError(f"expected a JSON object, got {type(doc).__name__}", source=source)

    if doc.get("itemid") is None:
        raise MalformedRecordError("missing required key 'itemid'", source=source, field="itemid")
    item_id = to_int(doc.get("itemid"), "itemid", source)
    shortname = _required_text(doc, "shortname", source)
    display_name = _required_text(doc, "Name", source)

    kwargs: Dict[str, Any] = {}
    provided: Set[str] = {"item_id", "shortname", "display_name"}
    for key, (attr, convert, default) in JSON_FIELD_MAP.items():
        raw = doc.get(key)
        if raw is None:
            kwargs[attr] = default
            continue
        kwargs[attr] = convert(raw, key, source)
        provided.add(attr)

    kwargs["category_name"] = category_name(kwargs["category_id"])
    if "category_id" in provided:
        provided.add("category_name")

    return ItemRecord(
        item_id=item_id,
        shortname=shortname,
        display_name=display_name,
        origin=ORIGIN_JSON,
        source_file=source,
        provided_fields=frozenset(provided),
        **kwargs,
    )


class JsonItemParser(BaseParser):
    def parse(self) -> ItemRecord:
        try:
            doc = json.loads(self.content)
        except (ValueError, RecursionError) as exc:
            raise MalformedRecordError(f"invalid JSON: {exc}", source=self.source_name) from None
        return item_from_json(doc, self.source_name)
