# -*- coding: utf-8 -*-
import logging

from core.indexers.recipes import count_unresolved, index_object_refs, index_recipes, resolve_recipes
from core.schemas.items import IngredientRef, ItemRecord, RecipeRecord


def _item(item_id, shortname, object_ref=None, **kw):
    return ItemRecord(item_id=item_id, shortname=shortname, display_name=shortname.title(), object_ref=object_ref, **kw)


def _recipe(shortname, *pairs, time=5.0, out=1, tier=None):
    return RecipeRecord(
        shortname=shortname,
        ingredients=[IngredientRef(quantity=q, target_ref=r) for q, r in pairs],
        craft_time_seconds=time,
        output_quantity=out,
        min_workbench_tier=tier,
    )


class TestResolve:
    def test_resolves_through_object_ref(self):
        items = [_item(1, "wood", object_ref=55), _item(2, "box")]
        out = resolve_recipes(items, [_recipe("box", (100, 55), time=30, out=1, tier=1)])
        box = out[1]
        assert [ing.to_dict() for ing in box.ingredients] == [
            {"quantity": 100, "targetRef": 55, "resolvedShortname": "wood", "resolvedDisplayName": "Wood"}
        ]
        assert (box.craft_time_seconds, box.output_quantity, box.min_workbench_tier) == (30, 1, 1)

    def test_unresolved_kept_with_null_names(self):
        out = resolve_recipes([_item(2, "box")], [_recipe("box", (3, 999))])
        (ing,) = out[0].ingredients
        assert ing.target_ref == 999
        assert ing.resolved_shortname is None
        assert ing.resolved_display_name is None
        assert count_unresolved(out) == 1

    def test_item_without_recipe_has_empty_ingredients(self):
        stale = _item(1, "wood", ingredients=[IngredientRef(1, 2)], craft_time_seconds=9.0, output_quantity=1)
        (wood,) = resolve_recipes([stale], [])
        assert wood.ingredients == []
        assert wood.craft_time_seconds is None
        assert wood.output_quantity is None

    def test_idempotent(self):
        items = [_item(1, "wood", object_ref=55), _item(2, "box")]
        recipes = [_recipe("box", (100, 55), (1, 404))]
        once = resolve_recipes(items, recipes)
        twice = resolve_recipes(once, recipes)
        assert [i.to_dict() for i in once] == [i.to_dict() for i in twice]

    def test_recipe_for_unknown_shortname_ignored(self):
        out = resolve_recipes([_item(1, "wood")], [_recipe("ghost", (1, 1))])
        assert out[0].ingredients == []

    def test_does_not_mutate_inputs(self):
        item = _item(2, "box")
        resolve_recipes([item], [_recipe("box", (1, 1))])
        assert item.ingredients == []


class TestIndexes:
    def test_object_ref_first_wins(self):
        a, b = _item(1, "a", object_ref=5), _item(2, "b", object_ref=5)
        assert index_object_refs([a, b, _item(3, "c")]) == {5: a}

    def test_recipe_last_wins(self):
        first, second = _recipe("box", (1, 1)), _recipe("box", (2, 2))
        assert index_recipes([first, second])["box"] is second


def test_duplicate_identifiers_warn(caplog):
    with caplog.at_level(logging.WARNING):
        index_object_refs([_item(1, "a", object_ref=5), _item(2, "b", object_ref=5)])
        index_recipes([_recipe("box", (1, 1)), _recipe("box", (2, 2))])
    assert "objectRef 5 shared by a and b" in caplog.text
    assert "Recipe 'box' redefined" in caplog.text
