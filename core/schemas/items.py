#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Item / recipe data model.

Python attributes are snake_case; the serialized form keeps the camelCase
field names consumed downstream (see ``ItemRecord.to_dict``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Tuple

__all__ = [
    "ORIGIN_JSON",
    "ORIGIN_MERGED",
    "ORIGIN_PREFAB",
    "IngredientRef",
    "ItemRecord",
    "RecipeRecord",
]

ORIGIN_PREFAB = "prefab"
ORIGIN_JSON = "json"
ORIGIN_MERGED = "merged"


@dataclass(frozen=True)
class IngredientRef:
    quantity: int
    target_ref: int
    resolved_shortname: Optional[str] = None
    resolved_display_name: Optional[str] = None

    @property
    def resolved(self) -> bool:
        return self.resolved_shortname is not None

    def unresolved(self) -> "IngredientRef":
        return IngredientRef(quantity=self.quantity, target_ref=self.target_ref)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "quantity": int(self.quantity),
            "targetRef": self.target_ref,
            "resolvedShortname": self.resolved_shortname,
            "resolvedDisplayName": self.resolved_display_name,
        }

    @classmethod
    def from_dict(cls, row: Mapping[str, Any]) -> "IngredientRef":
        return cls(
            quantity=int(row["quantity"]),
            target_ref=int(row["targetRef"]),
            resolved_shortname=row.get("resolvedShortname"),
            resolved_display_name=row.get("resolvedDisplayName"),
        )


@dataclass
class RecipeRecord:
    shortname: str
    ingredients: List[IngredientRef]
    craft_time_seconds: float
    output_quantity: int
    min_workbench_tier: Optional[int] = None
    source_file: Optional[str] = None


# (attribute, serialized key), in output order
_ITEM_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("item_id", "itemId"),
    ("shortname", "shortname"),
    ("display_name", "displayName"),
    ("description", "description"),
    ("category_id", "categoryId"),
    ("category_name", "categoryName"),
    ("stackable", "stackable"),
    ("volume", "volume"),
    ("max_draggable", "maxDraggable"),
    ("is_wearable", "isWearable"),
    ("is_holdable", "isHoldable"),
    ("is_usable", "isUsable"),
    ("has_skins", "hasSkins"),
    ("item_type", "itemType"),
    ("amount_type", "amountType"),
    ("quick_despawn", "quickDespawn"),
    ("rarity", "rarity"),
    ("condition", "condition"),
    ("parent", "parent"),
    ("object_ref", "objectRef"),
    ("ingredients", "ingredients"),
    ("craft_time_seconds", "craftTimeSeconds"),
    ("output_quantity", "outputQuantity"),
    ("min_workbench_tier", "minWorkbenchTier"),
    ("origin", "origin"),
    ("source_file", "sourceFile"),
)


@dataclass
class ItemRecord:
    """One catalog item.

    ``provided_fields`` names the attributes the originating source actually
    declared (as opposed to defaults). The merge step only lets declared
    fields override; it is not serialized.
    """

    item_id: int
    shortname: str
    display_name: str
    description: Optional[str] = None
    category_id: Optional[int] = None
    category_name: Optional[str] = None
    stackable: Optional[int] = None
    volume: Optional[float] = None
    max_draggable: Optional[int] = None
    is_wearable: bool = False
    is_holdable: bool = False
    is_usable: bool = False
    has_skins: bool = False
    item_type: Optional[str] = None
    amount_type: Optional[str] = None
    quick_despawn: bool = False
    rarity: Optional[str] = None
    condition: Any = None
    parent: Optional[int] = None
    object_ref: Optional[int] = None
    ingredients: List[IngredientRef] = field(default_factory=list)
    craft_time_seconds: Optional[float] = None
    output_quantity: Optional[int] = None
    min_workbench_tier: Optional[int] = None
    origin: str = ORIGIN_PREFAB
    source_file: Optional[str] = None
    provided_fields: FrozenSet[str] = field(default_factory=frozenset, compare=False, repr=False)

    @property
    def has_recipe(self) -> bool:
        return bool(self.ingredients)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for attr, key in _ITEM_FIELDS:
            val = getattr(self, attr)
            if attr == "ingredients":
                val = [ing.to_dict() for ing in (val or [])]
            out[key] = val
        return out

    @classmethod
    def from_dict(cls, row: Mapping[str, Any]) -> "ItemRecord":
        kwargs: Dict[str, Any] = {}
        for attr, key in _ITEM_FIELDS:
            if key not in row:
                continue
            val = row[key]
            if attr == "ingredients":
                val = [IngredientRef.from_dict(x) for x in (val or [])]
            kwargs[attr] = val
        return cls(**kwargs)
