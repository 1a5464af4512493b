#!/usr/bin/env python3
"""
JSON Utilities Module

Centralized JSON writing with consistent pretty-printing, so exported report
data is easy to diff and search.
"""

import json
from pathlib import Path
from typing import Any


def write_json_with_defaults(filepath: str | Path, data: Any, default: Any = str) -> None:
    """
    Write data to a JSON file with a custom default serializer for non-JSON types.

    Args:
        filepath: Path to the JSON file
        data: Data to write to the file
        default: Function to serialize non-JSON types (default: str)
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False, default=default)
