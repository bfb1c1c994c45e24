# -*- coding: utf-8 -*-
"""Base classes and field helpers for record parsers."""

from __future__ import annotations

import math
import os
import re
from typing import Any, Dict, Optional, Tuple

from core.errors import MalformedRecordError

__all__ = ["BaseParser", "to_bool", "to_int", "to_number"]

_INT_RE = re.compile(r"^[+-]?\d+$")
_NUM_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\d*\.?\d+)(?:[eE][+-]?\d+)?$")

_marker_cache: Dict[str, "re.Pattern[str]"] = {}


def _marker_re(name: str) -> "re.Pattern[str]":
    # `name:` at line start, after indentation and an optional YAML list dash
    pat = _marker_cache.get(name)
    if pat is None:
        pat = re.compile(
            r"^([ \t]*)(?:-[ \t]+)?" + re.escape(name) + r":[ \t]*([^\r\n]*?)[ \t]*\r?$",
            re.MULTILINE,
        )
        _marker_cache[name] = pat
    return pat


def _unquote(s: str) -> str:
    if len(s) >= 2 and s[0] == s[-1] and s[0] in ("'", '"'):
        return s[1:-1]
    return s


def to_int(raw: Any, field: str, source: Optional[str] = None) -> int:
    """Parse an integer field; integral floats ("2.0") are accepted."""
    if isinstance(raw, bool):
        raise MalformedRecordError(f"{field}: expected a number, got {raw!r}", source=source, field=field)
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        if math.isfinite(raw) and raw.is_integer():
            return int(raw)
        raise MalformedRecordError(f"{field}: expected an integer, got {raw!r}", source=source, field=field)
    s = str(raw if raw is not None else "").strip()
    try:
        if _INT_RE.match(s):
            return int(s)
        if _NUM_RE.match(s):
            val = float(s)
            if math.isfinite(val) and val.is_integer():
                return int(val)
    except (ValueError, OverflowError) as exc:
        raise MalformedRecordError(f"{field}: {exc}", source=source, field=field) from None
    raise MalformedRecordError(f"{field}: expected an integer, got {raw!r}", source=source, field=field)


def to_number(raw: Any, field: str, source: Optional[str] = None) -> float:
    """Parse a finite number; NaN and infinities are rejected."""
    if isinstance(raw, bool):
        raise MalformedRecordError(f"{field}: expected a number, got {raw!r}", source=source, field=field)
    if isinstance(raw, (int, float)):
        num: Any = raw
    else:
        num = str(raw if raw is not None else "").strip()
        if not _NUM_RE.match(num):
            raise MalformedRecordError(f"{field}: expected a number, got {raw!r}", source=source, field=field)
    try:
        val = float(num)
    except (ValueError, OverflowError) as exc:
        raise MalformedRecordError(f"{field}: {exc}", source=source, field=field) from None
    if not math.isfinite(val):
        raise MalformedRecordError(f"{field}: expected a finite number, got {raw!r}", source=source, field=field)
    return val


def to_bool(raw: Any, field: str, source: Optional[str] = None) -> bool:
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, (int, float)):
        return raw != 0
    if isinstance(raw, str) and raw.strip().lower() in ("true", "false", "1", "0"):
        return raw.strip().lower() in ("true", "1")
    raise MalformedRecordError(f"{field}: expected a boolean, got {raw!r}", source=source, field=field)


class BaseParser:
    def __init__(self, content: str, path: Optional[str] = None):
        self.path = path
        self.content = content or ""

    @property
    def source_name(self) -> Optional[str]:
        return os.path.basename(self.path) if self.path else None

    # ----------------- line-level field markers -----------------

    def _field_match(self, name: str) -> Optional["re.Match[str]"]:
        return _marker_re(name).search(self.content)

    def _has_marker(self, name: str) -> bool:
        return self._field_match(name) is not None

    def _field(self, name: str) -> Optional[str]:
        """Remainder of the first ``name:`` line, or None when absent/empty."""
        m = self._field_match(name)
        if not m:
            return None
        val = _unquote(m.group(2).strip())
        return val or None

    def _nested_field(self, parent: str, child: str) -> Optional[str]:
        """Find ``child`` inside the block opened by ``parent:``.

        Handles both the indented form::

            displayName:
              token: wood

        and the inline flow form ``displayName: {token: wood}``.
        """
        m = self._field_match(parent)
        if not m:
            return None

        inline = m.group(2).strip()
        if inline.startswith("{"):
            im = re.search(r"(?:^|[{,\s])" + re.escape(child) + r":\s*([^,}]+)", inline)
            if im:
                val = _unquote(im.group(1).strip())
                return val or None
            return None
        if inline:
            return None

        parent_indent = len(m.group(1).expandtabs())
        child_re = _marker_re(child)
        for line in self.content[m.end():].splitlines():
            if not line.strip():
                continue
            indent = len(line) - len(line.lstrip())
            if indent <= parent_indent:
                break
            cm = child_re.match(line)
            if cm:
                val = _unquote(cm.group(2).strip())
                return val or None
        return None

    def _int_field(self, name: str) -> Tuple[bool, Optional[int]]:
        raw = self._field(name)
        if raw is None:
            return False, None
        return True, to_int(raw, name, self.source_name)
