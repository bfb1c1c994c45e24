#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Attach recipes to items and resolve ingredient references.

Two separate keyspaces:
- object_ref -> item   (ingredient targets)
- shortname  -> recipe (item <-> recipe join)

``resolve_recipes`` is pure: items without a recipe get ``ingredients=[]``
and null craft fields, so running it twice gives the same result.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, Iterable, List, Sequence

from core.schemas.items import IngredientRef, ItemRecord, RecipeRecord

__all__ = ["count_unresolved", "index_object_refs", "index_recipes", "resolve_ingredient", "resolve_recipes"]

logger = logging.getLogger(__name__)


def index_object_refs(items: Iterable[ItemRecord]) -> Dict[int, ItemRecord]:
    out: Dict[int, ItemRecord] = {}
    for item in items:
        if item.object_ref is None:
            continue
        if item.object_ref in out:
            logger.warning("objectRef %s shared by %s and %s", item.object_ref, out[item.object_ref].shortname, item.shortname)
            continue
        out[item.object_ref] = item
    return out


def index_recipes(recipes: Iterable[RecipeRecord]) -> Dict[str, RecipeRecord]:
    out: Dict[str, RecipeRecord] = {}
    for recipe in recipes:
        if recipe.shortname in out:
            logger.warning("Recipe %r redefined in %s", recipe.shortname, recipe.source_file)
        out[recipe.shortname] = recipe
    return out


def resolve_ingredient(ing: IngredientRef, by_ref: Dict[int, ItemRecord]) -> IngredientRef:
    target = by_ref.get(ing.target_ref)
    if target is None:
        return ing.unresolved()
    return IngredientRef(
        quantity=ing.quantity,
        target_ref=ing.target_ref,
        resolved_shortname=target.shortname,
        resolved_display_name=target.display_name,
    )


def resolve_recipes(items: Sequence[ItemRecord], recipes: Iterable[RecipeRecord]) -> List[ItemRecord]:
    by_ref = index_object_refs(items)
    by_name = index_recipes(recipes)

    out: List[ItemRecord] = []
    for item in items:
        recipe = by_name.get(item.shortname)
        if recipe is None:
            out.append(
                replace(
                    item,
                    ingredients=[],
                    craft_time_seconds=None,
                    output_quantity=None,
                    min_workbench_tier=None,
                )
            )
            continue
        out.append(
            replace(
                item,
                ingredients=[resolve_ingredient(ing, by_ref) for ing in recipe.ingredients],
                craft_time_seconds=recipe.craft_time_seconds,
                output_quantity=recipe.output_quantity,
                min_workbench_tier=recipe.min_workbench_tier,
            )
        )
    return out


def count_unresolved(items: Iterable[ItemRecord]) -> int:
    return sum(1 for item in items for ing in item.ingredients if not ing.resolved)
