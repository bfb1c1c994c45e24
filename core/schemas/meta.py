#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Metadata block stamped on dataset artifacts."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from core.version import dataset_schema, project_version


def now_iso() -> str:
    return datetime.now().astimezone().isoformat(timespec="seconds")


def build_meta(
    *,
    tool: str,
    schema: Optional[int] = None,
    sources: Optional[Dict[str, Any]] = None,
    extra: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    meta: Dict[str, Any] = {
        "schema": int(schema if schema is not None else dataset_schema()),
        "generated": now_iso(),
        "tool": str(tool),
        "project_version": project_version(),
    }
    if sources:
        meta["sources"] = sources
    if extra:
        meta.update(extra)
    return meta
