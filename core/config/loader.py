#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Extraction config loader.

Precedence: explicit argument > environment variable > conf/settings.ini > default.
A missing settings file is fine; built-in defaults apply.
"""

from __future__ import annotations

import configparser
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from core.errors import ConfigError

PROJECT_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_CONFIG_PATH = PROJECT_ROOT / "conf" / "settings.ini"

DEFAULTS = {
    ("PATHS", "EXPORT_ROOT"): "export-data/ExportedProject/Assets/prefabs",
    ("PATHS", "ITEMS_JSON_DIR"): "game-data/Bundles/items",
    ("PATHS", "OUTPUT_DIR"): "processed-data",
    ("PATHS", "REPORT_DIR"): "data/reports",
    ("EXTRACT", "WORKERS"): "4",
    ("EXTRACT", "PREFAB_SUFFIX"): ".prefab",
    ("EXTRACT", "ITEMS_FILE"): "rust_items.json",
    ("EXTRACT", "SUMMARY_FILE"): "extraction_summary.json",
}

ENV_KEYS = {
    ("PATHS", "EXPORT_ROOT"): "EXPORT_ROOT",
    ("PATHS", "ITEMS_JSON_DIR"): "ITEMS_JSON_DIR",
    ("PATHS", "OUTPUT_DIR"): "OUTPUT_DIR",
    ("PATHS", "REPORT_DIR"): "REPORT_DIR",
    ("EXTRACT", "WORKERS"): "EXTRACT_WORKERS",
}

PathLike = Union[str, Path]


@dataclass(frozen=True)
class ExtractConfig:
    export_root: Path
    items_json_dir: Path
    output_dir: Path
    report_dir: Path
    workers: int = 4
    prefab_suffix: str = ".prefab"
    items_file: str = "rust_items.json"
    summary_file: str = "extraction_summary.json"

    @property
    def items_path(self) -> Path:
        return self.output_dir / self.items_file

    @property
    def summary_path(self) -> Path:
        return self.output_dir / self.summary_file

    @property
    def report_path(self) -> Path:
        return self.report_dir / "extraction_summary.md"


class ConfigLoader:
    def __init__(self, config_path: Optional[PathLike] = None):
        self.project_root = PROJECT_ROOT
        self.config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

        self.config = configparser.ConfigParser()
        if self.config_path.exists():
            self.config.read(self.config_path, encoding="utf-8")

    def get(self, section: str, key: str) -> Optional[str]:
        """Return the INI value (``~`` expanded), or None when unset."""
        val = self.config.get(section, key, fallback="").strip()
        if not val:
            return None
        return os.path.expanduser(val)


def _resolve_path(raw: str, base_dir: Path) -> Path:
    p = Path(os.path.expanduser(str(raw)))
    if not p.is_absolute():
        p = base_dir / p
    return p


def _pick(loader: ConfigLoader, section: str, key: str, explicit: Optional[object]) -> str:
    if explicit is not None and str(explicit).strip():
        return str(explicit).strip()
    env_key = ENV_KEYS.get((section, key))
    if env_key:
        env_val = os.environ.get(env_key, "").strip()
        if env_val:
            return env_val
    ini_val = loader.get(section, key)
    if ini_val:
        return ini_val
    return DEFAULTS[(section, key)]


def _parse_workers(raw: str) -> int:
    try:
        n = int(str(raw).strip())
    except ValueError:
        raise ConfigError(f"WORKERS must be an integer, got {raw!r}") from None
    if n < 1:
        raise ConfigError(f"WORKERS must be >= 1, got {n}")
    return n


def resolve_config(
    *,
    config_path: Optional[PathLike] = None,
    base_dir: Optional[PathLike] = None,
    export_root: Optional[PathLike] = None,
    items_json_dir: Optional[PathLike] = None,
    output_dir: Optional[PathLike] = None,
    report_dir: Optional[PathLike] = None,
    workers: Optional[int] = None,
) -> ExtractConfig:
    loader = ConfigLoader(config_path)
    base = Path(base_dir).resolve() if base_dir else Path.cwd()

    return ExtractConfig(
        export_root=_resolve_path(_pick(loader, "PATHS", "EXPORT_ROOT", export_root), base),
        items_json_dir=_resolve_path(_pick(loader, "PATHS", "ITEMS_JSON_DIR", items_json_dir), base),
        output_dir=_resolve_path(_pick(loader, "PATHS", "OUTPUT_DIR", output_dir), base),
        report_dir=_resolve_path(_pick(loader, "PATHS", "REPORT_DIR", report_dir), base),
        workers=_parse_workers(_pick(loader, "EXTRACT", "WORKERS", workers)),
        prefab_suffix=_pick(loader, "EXTRACT", "PREFAB_SUFFIX", None),
        items_file=_pick(loader, "EXTRACT", "ITEMS_FILE", None),
        summary_file=_pick(loader, "EXTRACT", "SUMMARY_FILE", None),
    )
