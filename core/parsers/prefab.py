# -*- coding: utf-8 -*-
"""Description-file (prefab) record extractor.

A prefab export is key-indented YAML-ish text. Fields are located by marker
lines rather than by a full YAML parse, so extra/unknown fields and
out-of-order fields are tolerated.

One file yields up to two records:
- an item definition (itemid + shortname + displayName.token all present)
- a recipe (ingredients + time + amountToCreate all present)
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Mapping, Optional, Set, Tuple

from core.categories import category_name
from core.parsers.base import BaseParser, to_int, to_number
from core.schemas.items import ORIGIN_PREFAB, IngredientRef, ItemRecord, RecipeRecord

__all__ = ["CONTENT_FIXUPS", "PrefabParser", "PrefabRecords"]

logger = logging.getLogger(__name__)

# shortname -> (display name, category code); applied over whatever the file declares
CONTENT_FIXUPS: Mapping[str, Tuple[str, int]] = MappingProxyType(
    {
        "basicblueprintfragment": ("Basic Blueprint Fragment", 14),
        "advancedblueprintfragment": ("Advanced Blueprint Fragment", 14),
    }
)

_OBJECT_HEADER_RE = re.compile(r"^---[ \t]*!u!114[ \t]+&(-?\d+)", re.MULTILINE)
_ITEMDEF_RE = re.compile(r"^[ \t]*(?:-[ \t]+)?itemDef:[ \t]*\{([^}\r\n]*)\}", re.MULTILINE)
_FILEID_RE = re.compile(r"fileID:\s*([^,}\s]+)")
_AMOUNT_RE = re.compile(r"^[ \t]*(?:-[ \t]+)?amount:[ \t]*([^\r\n]*?)[ \t]*\r?$", re.MULTILINE)


@dataclass
class PrefabRecords:
    item: Optional[ItemRecord] = None
    recipe: Optional[RecipeRecord] = None

    def __bool__(self) -> bool:
        return self.item is not None or self.recipe is not None


class PrefabParser(BaseParser):
    """Extract item/recipe records from one prefab file.

    ``parse()`` raises ``MalformedRecordError`` when a numeric field is not
    numeric; callers drop the whole file in that case.
    """

    def __init__(self, content: str, path: Optional[str] = None, *, suffix: str = ".prefab"):
        super().__init__(content, path)
        self.suffix = suffix

    def parse(self) -> PrefabRecords:
        return PrefabRecords(item=self._parse_item(), recipe=self._parse_recipe())

    # ----------------- item definition -----------------

    def _parse_item(self) -> Optional[ItemRecord]:
        itemid_m = self._field_match("itemid")
        shortname = self._field("shortname")
        display_name = self._nested_field("displayName", "token")
        itemid_raw = self._field("itemid")
        if itemid_raw is None or shortname is None or display_name is None:
            return None

        src = self.source_name
        provided: Set[str] = {"item_id", "shortname", "display_name"}
        item_id = to_int(itemid_raw, "itemid", src)

        has_cat, category = self._int_field("category")
        has_stack, stackable = self._int_field("stackable")
        has_drag, max_draggable = self._int_field("maxDraggable")
        volume_raw = self._field("volume")
        volume = to_number(volume_raw, "volume", src) if volume_raw is not None else None
        if volume is not None and volume.is_integer():
            volume = int(volume)
        description = self._nested_field("displayDescription", "token")

        fixup = CONTENT_FIXUPS.get(shortname)
        if fixup:
            display_name, category = fixup
            has_cat = True

        for attr, present in (
            ("category_id", has_cat),
            ("category_name", has_cat),
            ("stackable", has_stack),
            ("max_draggable", has_drag),
            ("volume", volume is not None),
            ("description", description is not None),
        ):
            if present:
                provided.add(attr)

        return ItemRecord(
            item_id=item_id,
            shortname=shortname,
            display_name=display_name,
            description=description,
            category_id=category,
            category_name=category_name(category),
            stackable=stackable,
            volume=volume,
            max_draggable=max_draggable,
            object_ref=self._object_ref(itemid_m.start() if itemid_m else None),
            origin=ORIGIN_PREFAB,
            source_file=src,
            provided_fields=frozenset(provided),
        )

    def _object_ref(self, anchor_pos: Optional[int]) -> Optional[int]:
        """Anchor id of the MonoBehaviour block that holds the item fields."""
        headers = list(_OBJECT_HEADER_RE.finditer(self.content))
        if not headers:
            return None
        chosen = headers[0]
        if anchor_pos is not None:
            preceding = [h for h in headers if h.start() < anchor_pos]
            if preceding:
                chosen = preceding[-1]
        return to_int(chosen.group(1), "objectRef", self.source_name)

    # ----------------- recipe -----------------

    def _parse_recipe(self) -> Optional[RecipeRecord]:
        ing_m = self._field_match("ingredients")
        time_raw = self._field("time")
        amount_raw = self._field("amountToCreate")
        if ing_m is None or time_raw is None or amount_raw is None:
            return None

        src = self.source_name
        craft_time = to_number(time_raw, "time", src)
        output_quantity = to_int(amount_raw, "amountToCreate", src)
        _, tier = self._int_field("workbenchLevelRequired")

        shortname = self._field("shortname")
        if shortname is None:
            base = src or "unknown"
            shortname = base[: -len(self.suffix)] if self.suffix and base.endswith(self.suffix) else os.path.splitext(base)[0]

        return RecipeRecord(
            shortname=shortname,
            ingredients=self._scan_ingredients(ing_m.start()),
            craft_time_seconds=craft_time,
            output_quantity=output_quantity,
            min_workbench_tier=tier,
            source_file=src,
        )

    def _scan_ingredients(self, start: int) -> List[IngredientRef]:
        """Pair each ``itemDef`` block with the nearest following ``amount``.

        The amount for entry i is searched between the end of its itemDef and
        the start of entry i+1; entries without one are dropped.
        """
        src = self.source_name
        defs = [m for m in _ITEMDEF_RE.finditer(self.content, start) if _FILEID_RE.search(m.group(1))]
        out: List[IngredientRef] = []
        for idx, m in enumerate(defs):
            target_ref = to_int(_FILEID_RE.search(m.group(1)).group(1), "itemDef.fileID", src)
            end = defs[idx + 1].start() if idx + 1 < len(defs) else len(self.content)
            am = _AMOUNT_RE.search(self.content, m.end(), end)
            if am is None or not am.group(1).strip():
                logger.warning("%s: ingredient fileID=%s has no amount; dropped", src, target_ref)
                continue
            quantity = to_int(am.group(1).strip(), "amount", src)
            if quantity <= 0:
                logger.warning("%s: ingredient fileID=%s has amount %s; dropped", src, target_ref, quantity)
                continue
            out.append(IngredientRef(quantity=quantity, target_ref=target_ref))
        return out
