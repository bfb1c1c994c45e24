# -*- coding: utf-8 -*-
import json
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


WOOD_PREFAB = """%YAML 1.1
%TAG !u! tag:unity3d.com,2011:
--- !u!1 &100100
GameObject:
  m_ObjectHideFlags: 0
  m_Name: wood.item
--- !u!114 &55
MonoBehaviour:
  m_ObjectHideFlags: 0
  m_GameObject: {fileID: 100100}
  itemid: 100
  shortname: wood
  displayName:
    token: Wood
    english: Wood
  displayDescription:
    token: wood_desc
    english: Harvested from trees.
  category: 3
  stackable: 1000
  volume: 0
  maxDraggable: 0
"""

WORKBENCH_PREFAB = """%YAML 1.1
%TAG !u! tag:unity3d.com,2011:
--- !u!114 &91
MonoBehaviour:
  itemid: 300
  shortname: workbench
  displayName:
    token: Work Bench Level 1
  category: 13
  stackable: 1
--- !u!114 &92
MonoBehaviour:
  ingredients:
  - itemDef: {fileID: 55}
    amount: 2
  time: 30
  amountToCreate: 1
  workbenchLevelRequired: 0
"""

RECIPE_ONLY_PREFAB = """--- !u!114 &400
MonoBehaviour:
  ingredients:
  - itemDef: {fileID: 55}
    amount: 50
  - itemDef: {fileID: 999}
    amount: 3
  time: 10.5
  amountToCreate: 2
"""


@pytest.fixture
def write_file(tmp_path):
    def _write(rel: str, text: str) -> Path:
        p = tmp_path / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(text, encoding="utf-8")
        return p

    return _write


@pytest.fixture
def write_json_item(tmp_path):
    def _write(name: str, doc, folder: str = "items") -> Path:
        p = tmp_path / folder / name
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(doc), encoding="utf-8")
        return p

    return _write


@pytest.fixture
def game_tree(tmp_path, write_file, write_json_item):
    """Prefab export tree + JSON item dir covering the end-to-end scenarios."""
    write_file("prefabs/resources/wood.item.prefab", WOOD_PREFAB)
    write_file("prefabs/deployable/workbench/workbench1.item.prefab", WORKBENCH_PREFAB)
    write_file("prefabs/misc/readme.txt", "itemid: 1\nshortname: nope\n")
    write_json_item(
        "metal.ore.json",
        {"itemid": 200, "shortname": "metal.ore", "Name": "Metal Ore", "Category": 3, "stackable": 1000},
    )
    write_json_item("wood.json", {"itemid": 100, "shortname": "wood", "Name": "Wood", "Description": "Logs."})
    return {
        "export_root": tmp_path / "prefabs",
        "items_json_dir": tmp_path / "items",
        "output_dir": tmp_path / "out",
        "report_dir": tmp_path / "reports",
    }
