#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Unified CLI dispatcher for rustitems."""

from __future__ import annotations

import runpy
import sys
from pathlib import Path
from typing import List, Optional, Tuple

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


def _tool_path(tool: dict) -> Path:
    folder = tool.get("folder") or "apps/cli/commands"
    return PROJECT_ROOT / folder / str(tool.get("file"))


def _print_usage(tools: List[dict]) -> None:
    print("usage: rustitems <tool> [args...]\n")
    for tool in tools:
        print(f"  {tool.get('alias'):<8} {tool.get('desc')}")
        print(f"  {'':<8} {tool.get('usage')}")


def _resolve_tool(alias: Optional[str]) -> Tuple[Optional[Path], List[str]]:
    from apps.cli.registry import get_tools

    key = str(alias or "").strip()
    if not key:
        return None, []
    for tool in get_tools():
        if tool.get("alias") == key or tool.get("file") == key:
            return _tool_path(tool), []
    return None, [key]


def main(argv: Optional[List[str]] = None) -> int:
    from apps.cli.registry import get_tools

    argv = list(argv) if argv is not None else list(sys.argv[1:])
    alias = argv[0] if argv else None
    if alias in ("-h", "--help"):
        alias = None
    path, unknown = _resolve_tool(alias)
    if path is None:
        if unknown:
            print(f"unknown tool: {unknown[0]}\n")
        _print_usage(get_tools())
        return 2 if unknown else 0

    sys.argv = [str(path)] + argv[1:]
    try:
        runpy.run_path(str(path), run_name="__main__")
    except SystemExit as exc:
        code = exc.code
        return code if isinstance(code, int) else (0 if code is None else 1)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
