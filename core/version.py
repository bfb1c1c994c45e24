# -*- coding: utf-8 -*-
"""Project version helpers."""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Dict

DEFAULT_DATASET_SCHEMA = "1"


def _project_root() -> Path:
    return Path(__file__).resolve().parents[1]


@lru_cache(maxsize=1)
def _load_version_file() -> Dict[str, str]:
    path = _project_root() / "conf" / "version.json"
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    if not isinstance(data, dict):
        return {}
    return {k: str(v).strip() for k, v in data.items() if isinstance(v, (str, int)) and str(v).strip()}


def project_version() -> str:
    return _load_version_file().get("project_version", "unknown")


def dataset_schema() -> int:
    raw = _load_version_file().get("dataset_schema", DEFAULT_DATASET_SCHEMA)
    try:
        return int(raw)
    except ValueError:
        return int(DEFAULT_DATASET_SCHEMA)
