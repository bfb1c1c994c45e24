# -*- coding: utf-8 -*-
"""Item category table.

One immutable code -> name mapping shared by the description-file extractor
and the JSON item loader, so both derive identical category names.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping, Optional

__all__ = ["CATEGORIES", "UNKNOWN_CATEGORY", "category_name"]

UNKNOWN_CATEGORY = "Unknown"

CATEGORIES: Mapping[int, str] = MappingProxyType(
    {
        0: "Weapon",
        1: "Construction",
        2: "Items",
        3: "Resources",
        4: "Attire",
        5: "Tool",
        6: "Medical",
        7: "Food",
        8: "Ammunition",
        9: "Traps",
        10: "Misc",
        13: "Deployable",
        14: "Component",
        16: "Vehicle",
        17: "Electrical",
    }
)


def category_name(code: Any) -> Optional[str]:
    """Map a category code to its name.

    None stays None (no category declared); codes outside the table map to
    ``UNKNOWN_CATEGORY``.
    """
    if code is None:
        return None
    if isinstance(code, bool):
        return UNKNOWN_CATEGORY
    try:
        key = int(code)
    except (TypeError, ValueError):
        return UNKNOWN_CATEGORY
    return CATEGORIES.get(key, UNKNOWN_CATEGORY)
