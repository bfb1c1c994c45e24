#!/usr/bin/env python3
"""rustitems tool registry."""

TOOLS = [
    # --- CLI tools (apps/cli/commands) ---
    {
        "file": "items.py",
        "alias": "items",
        "desc": "Query the built item dataset (items / recipes / categories)",
        "usage": "rustitems items <show|list|crafting|categories|used-in> ...",
        "type": "CLI",
        "folder": "apps/cli/commands"
    },

    # --- builders (devtools/) ---
    {
        "file": "build_items.py",
        "alias": "build",
        "desc": "Build rust_items.json + extraction summary from prefab exports and JSON items",
        "usage": "rustitems build [--export-root PATH] [--items-json-dir PATH] [--out-dir PATH] [--workers N] [--force]",
        "type": "Dev",
        "folder": "devtools"
    },
]


def get_tools():
    return TOOLS
