# -*- coding: utf-8 -*-
import json

import pytest

from core.config import ExtractConfig
from core.engine import ExtractionEngine
from core.errors import NoItemsFoundError


def _config(tree, **kw):
    return ExtractConfig(
        export_root=tree["export_root"],
        items_json_dir=tree["items_json_dir"],
        output_dir=tree["output_dir"],
        report_dir=tree["report_dir"],
        **kw,
    )


class TestExtract:
    def test_end_to_end_records(self, game_tree):
        result = ExtractionEngine(_config(game_tree), silent=True).extract()
        by_name = {i.shortname: i for i in result.items}

        assert [i.shortname for i in result.items] == ["workbench", "wood", "metal.ore"]

        bench = by_name["workbench"]
        assert [ing.to_dict() for ing in bench.ingredients] == [
            {"quantity": 2, "targetRef": 55, "resolvedShortname": "wood", "resolvedDisplayName": "Wood"}
        ]
        assert bench.craft_time_seconds == 30
        assert bench.output_quantity == 1
        assert bench.category_name == "Deployable"

        wood = by_name["wood"]
        assert wood.origin == "merged"
        assert wood.description == "Logs."
        assert wood.stackable == 1000
        assert wood.object_ref == 55
        assert wood.ingredients == []

        ore = by_name["metal.ore"]
        assert ore.origin == "json"
        assert ore.ingredients == []
        assert ore.category_name == "Resources"

        assert result.with_recipes == 1
        assert result.without_recipes == 2
        assert result.unresolved_refs == 0
        assert result.recipes_total == 1
        assert (result.prefab_files, result.json_files) == (2, 2)
        assert result.failures == []

    def test_parallel_matches_serial(self, game_tree):
        serial = ExtractionEngine(_config(game_tree, workers=1), silent=True).extract()
        pooled = ExtractionEngine(_config(game_tree, workers=4), silent=True).extract()
        assert [i.to_dict() for i in serial.items] == [i.to_dict() for i in pooled.items]

    def test_no_items_is_fatal(self, tmp_path):
        cfg = ExtractConfig(
            export_root=tmp_path / "none",
            items_json_dir=tmp_path / "none2",
            output_dir=tmp_path / "out",
            report_dir=tmp_path / "reports",
        )
        with pytest.raises(NoItemsFoundError):
            ExtractionEngine(cfg, silent=True).run()
        assert not (tmp_path / "out").exists()

    def test_json_only_run(self, tmp_path, write_json_item):
        write_json_item("a.json", {"itemid": 1, "shortname": "a", "Name": "A"})
        cfg = ExtractConfig(
            export_root=tmp_path / "absent",
            items_json_dir=tmp_path / "items",
            output_dir=tmp_path / "out",
            report_dir=tmp_path / "reports",
        )
        result = ExtractionEngine(cfg, silent=True).extract()
        assert [i.origin for i in result.items] == ["json"]


class TestWrite:
    def test_outputs(self, game_tree):
        engine = ExtractionEngine(_config(game_tree), silent=True)
        paths = engine.write(engine.extract())

        rows = json.loads(paths["items"].read_text(encoding="utf-8"))
        assert len(rows) == 3
        summary = json.loads(paths["summary"].read_text(encoding="utf-8"))
        assert summary["totalItems"] == 3
        assert summary["itemsWithRecipes"] == 1
        assert summary["itemsWithoutRecipes"] == 2
        assert summary["categories"] == [3, 13]
        assert summary["meta"]["tool"] == "build_items"
        assert summary["meta"]["prefab_files"] == 2
        assert paths["report"].name == "extraction_summary.md"
        assert "# Item Extraction Summary" in paths["report"].read_text(encoding="utf-8")

    def test_no_report(self, game_tree):
        engine = ExtractionEngine(_config(game_tree), silent=True)
        paths = engine.write(engine.extract(), report=False)
        assert "report" not in paths
        assert not game_tree["report_dir"].exists()

    def test_rerun_is_stable(self, game_tree):
        cfg = _config(game_tree)
        ExtractionEngine(cfg, silent=True).run()
        first = cfg.items_path.read_text(encoding="utf-8")
        ExtractionEngine(cfg, silent=True).run()
        assert cfg.items_path.read_text(encoding="utf-8") == first
