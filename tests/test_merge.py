# -*- coding: utf-8 -*-
import logging

import pytest

from core.indexers.merge import dedupe_by_item_id, merge_items, merge_record, shortname_collisions
from core.parsers import item_from_json
from core.schemas.items import ORIGIN_JSON, ORIGIN_MERGED, ORIGIN_PREFAB, IngredientRef, ItemRecord


def _prefab(item_id, shortname, **kw):
    provided = {"item_id", "shortname", "display_name"} | set(kw)
    kw.setdefault("display_name", shortname.title())
    return ItemRecord(item_id=item_id, shortname=shortname, origin=ORIGIN_PREFAB, provided_fields=frozenset(provided), **kw)


def _json(doc):
    base = {"itemid": doc.pop("itemid"), "shortname": doc.pop("shortname"), "Name": doc.pop("Name", "Json Name")}
    base.update(doc)
    return item_from_json(base, "x.json")


class TestFieldPrecedence:
    @pytest.mark.parametrize("json_volume, expected", [(5, 5), (None, 10)])
    def test_declared_json_field_wins(self, json_volume, expected):
        doc = {"itemid": 7, "shortname": "rope"}
        if json_volume is not None:
            doc["volume"] = json_volume
        merged = merge_record(_prefab(7, "rope", volume=10, object_ref=77), _json(doc))
        assert merged.volume == expected
        assert merged.origin == ORIGIN_MERGED
        assert merged.display_name == "Json Name"

    def test_json_defaults_do_not_clobber_prefab(self):
        merged = merge_record(_prefab(7, "rope", stackable=50, category_id=2, category_name="Items"), _json({"itemid": 7, "shortname": "rope"}))
        assert merged.stackable == 50
        assert merged.category_id == 2
        assert merged.category_name == "Items"

    def test_prefab_only_attributes_survive(self):
        ing = IngredientRef(quantity=1, target_ref=5)
        base = _prefab(7, "rope", object_ref=77, ingredients=[ing])
        merged = merge_record(base, _json({"itemid": 7, "shortname": "rope", "Category": 2}))
        assert merged.object_ref == 77
        assert merged.ingredients == [ing]
        assert merged.category_name == "Items"
        assert merged.source_file == base.source_file


class TestMergeItems:
    def test_totality_and_order(self):
        prefab = [_prefab(1, "a"), _prefab(2, "b")]
        json_items = [_json({"itemid": 3, "shortname": "c"}), _json({"itemid": 1, "shortname": "a"})]
        out = merge_items(prefab, json_items)
        assert [i.item_id for i in out] == [1, 2, 3]
        assert [i.origin for i in out] == [ORIGIN_MERGED, ORIGIN_PREFAB, ORIGIN_JSON]

    def test_each_item_id_once(self, caplog):
        prefab = [_prefab(1, "a"), _prefab(1, "a_dup")]
        json_items = [_json({"itemid": 2, "shortname": "b"}), _json({"itemid": 2, "shortname": "b_dup"})]
        with caplog.at_level(logging.WARNING):
            out = merge_items(prefab, json_items)
        assert [(i.item_id, i.shortname) for i in out] == [(1, "a"), (2, "b")]
        assert "Duplicate prefab itemid 1" in caplog.text
        assert "Duplicate json itemid 2" in caplog.text

    def test_empty_inputs(self):
        assert merge_items([], []) == []

    def test_shortname_collision_only_warns(self, caplog):
        with caplog.at_level(logging.WARNING):
            out = merge_items([_prefab(1, "same"), _prefab(2, "same")], [])
        assert len(out) == 2
        assert "'same'" in caplog.text


def test_dedupe_keeps_first():
    a, b = _prefab(1, "first"), _prefab(1, "second")
    assert dedupe_by_item_id([a, b]) == [a]


def test_shortname_collisions():
    assert shortname_collisions([_prefab(1, "x"), _prefab(2, "x"), _prefab(3, "y")]) == {"x": 2}
