# -*- coding: utf-8 -*-
"""Record parsers for prefab exports and JSON item definitions."""

from core.parsers.base import BaseParser
from core.parsers.item_json import JsonItemParser, item_from_json
from core.parsers.prefab import CONTENT_FIXUPS, PrefabParser, PrefabRecords

__all__ = [
    "BaseParser",
    "CONTENT_FIXUPS",
    "JsonItemParser",
    "PrefabParser",
    "PrefabRecords",
    "item_from_json",
]
