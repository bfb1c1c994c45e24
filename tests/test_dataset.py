# -*- coding: utf-8 -*-
import json

import pytest

from core.errors import DatasetWriteError
from core.indexers.dataset import (
    build_summary,
    category_counts,
    render_summary_markdown,
    write_dataset,
    write_text,
)
from core.indexers.prefab_scan import FileFailure
from core.schemas.items import IngredientRef, ItemRecord
from core.schemas.meta import build_meta


@pytest.fixture
def items():
    return [
        ItemRecord(item_id=1, shortname="wood", display_name="Wood", category_id=3, category_name="Resources"),
        ItemRecord(
            item_id=2,
            shortname="box",
            display_name="Box",
            category_id=13,
            category_name="Deployable",
            ingredients=[IngredientRef(quantity=100, target_ref=55, resolved_shortname="wood", resolved_display_name="Wood")],
            craft_time_seconds=30.0,
            output_quantity=1,
        ),
        ItemRecord(item_id=3, shortname="stones", display_name="Stones", category_id=3, category_name="Resources"),
        ItemRecord(item_id=4, shortname="odd", display_name="Odd"),
    ]


class TestSummary:
    def test_counts(self, items):
        summary = build_summary(items)
        assert summary == {"totalItems": 4, "itemsWithRecipes": 1, "itemsWithoutRecipes": 3, "categories": [3, 13]}

    def test_meta_attached(self, items):
        meta = build_meta(tool="test", sources={"export_root": "/x"})
        summary = build_summary(items, meta=meta)
        assert summary["meta"]["tool"] == "test"
        assert summary["meta"]["sources"] == {"export_root": "/x"}
        assert isinstance(summary["meta"]["schema"], int)

    def test_category_counts_accepts_dicts(self, items):
        expected = [{"id": 3, "name": "Resources", "count": 2}, {"id": 13, "name": "Deployable", "count": 1}]
        assert category_counts(items) == expected
        assert category_counts([i.to_dict() for i in items]) == expected


class TestWriter:
    def test_writes_both_files_and_creates_dirs(self, tmp_path, items):
        items_path = tmp_path / "deep" / "out" / "rust_items.json"
        summary_path = tmp_path / "deep" / "out" / "extraction_summary.json"
        path, summary = write_dataset(items, items_path, summary_path)

        assert path == items_path
        rows = json.loads(items_path.read_text(encoding="utf-8"))
        assert [r["shortname"] for r in rows] == ["wood", "box", "stones", "odd"]
        assert rows[1]["ingredients"][0]["resolvedShortname"] == "wood"
        assert rows[3]["categoryName"] is None
        assert json.loads(summary_path.read_text(encoding="utf-8")) == summary
        assert not list(items_path.parent.glob("*.tmp"))

    def test_replaces_existing_output(self, tmp_path, items):
        items_path = tmp_path / "rust_items.json"
        items_path.write_text("stale", encoding="utf-8")
        write_dataset(items[:1], items_path, tmp_path / "summary.json")
        assert len(json.loads(items_path.read_text(encoding="utf-8"))) == 1

    def test_unwritable_destination(self, tmp_path, items):
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        with pytest.raises(DatasetWriteError):
            write_dataset(items, blocker / "rust_items.json", blocker / "summary.json")

    def test_write_text_unicode(self, tmp_path):
        p = write_text(tmp_path / "a.md", "Écrou ⚙\n")
        assert p.read_text(encoding="utf-8") == "Écrou ⚙\n"


def test_markdown_report(items):
    summary = build_summary(items, meta=build_meta(tool="build_items", sources={"export_root": "/exports"}))
    text = render_summary_markdown(
        summary,
        items=items,
        failures=[FileFailure(path="/exports/bad.prefab", error="itemid: expected an integer")],
        unresolved_refs=2,
    )
    assert text.startswith("# Item Extraction Summary")
    assert "totalItems: 4" in text
    assert "unresolvedIngredients: 2" in text
    assert "| 13 | Deployable | 1 |" in text
    assert "## Failed Files (1)" in text
    assert "`bad.prefab`" in text
    assert "export_root: /exports" in text


class TestWriteSafety:
    def test_failed_summary_keeps_previous_items(self, tmp_path, items):
        items_path = tmp_path / "rust_items.json"
        items_path.write_text("[]\n", encoding="utf-8")
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")

        with pytest.raises(DatasetWriteError):
            write_dataset(items, items_path, blocker / "extraction_summary.json")

        assert items_path.read_text(encoding="utf-8") == "[]\n"
        assert not list(tmp_path.glob("*.tmp"))

    def test_non_finite_value_never_written(self, tmp_path):
        bad = [ItemRecord(item_id=1, shortname="a", display_name="A", volume=float("nan"))]
        items_path = tmp_path / "rust_items.json"
        with pytest.raises(DatasetWriteError):
            write_dataset(bad, items_path, tmp_path / "summary.json")
        assert not items_path.exists()

    def test_output_is_strict_json(self, tmp_path, items):
        items_path, _ = write_dataset(items, tmp_path / "rust_items.json", tmp_path / "summary.json")

        def _reject(token):
            raise ValueError(token)

        json.loads(items_path.read_text(encoding="utf-8"), parse_constant=_reject)
