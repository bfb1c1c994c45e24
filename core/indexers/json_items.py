#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""JSON item-source loader (one item definition per ``*.json`` file)."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Union

from core.errors import MalformedRecordError
from core.indexers.prefab_scan import FileFailure
from core.parsers.item_json import JsonItemParser
from core.schemas.items import ItemRecord

__all__ = ["JsonLoadResult", "list_json_item_files", "load_json_items"]

logger = logging.getLogger(__name__)


@dataclass
class JsonLoadResult:
    items: List[ItemRecord] = field(default_factory=list)
    failures: List[FileFailure] = field(default_factory=list)
    files_scanned: int = 0


def list_json_item_files(directory: Union[str, Path]) -> List[Path]:
    d = Path(directory)
    if not d.is_dir():
        logger.info("JSON item directory not found: %s", d)
        return []
    return sorted(p for p in d.iterdir() if p.is_file() and p.name.endswith(".json"))


def load_json_items(directory: Union[str, Path]) -> JsonLoadResult:
    files = list_json_item_files(directory)
    result = JsonLoadResult(files_scanned=len(files))

    for path in files:
        try:
            content = path.read_text(encoding="utf-8-sig")
            result.items.append(JsonItemParser(content, path=str(path)).parse())
        except (OSError, UnicodeDecodeError, MalformedRecordError) as exc:
            logger.warning("Skipping JSON item %s: %s", path.name, exc)
            result.failures.append(FileFailure(path=str(path), error=str(exc)))

    logger.info("Loaded %d items from %d JSON files (%d failed)", len(result.items), len(files), len(result.failures))
    return result
