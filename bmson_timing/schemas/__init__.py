"""JSON schema documents shipped with the package.

WHY: Both the bmson adapter (input) and the timing JSON formatter (output)
validate with jsonschema. Loading and caching the schema files in one
place keeps them from drifting apart.

RULES:
- Schemas live next to this module as ``*.json`` package data
- Each file is read once per process; callers must not mutate the result
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

SCHEMA_DIR = Path(__file__).resolve().parent

BMSON_TIMING_SCHEMA = "bmson_timing_schema.json"
TIMING_STRUCTURE_SCHEMA = "timing_structure_schema.json"

_CACHED_SCHEMAS: Dict[str, Dict[str, Any]] = {}


def load_schema(filename: str) -> Dict[str, Any]:
    """Load a bundled schema by filename, cached after the first read.

    Raises:
        FileNotFoundError: If no schema with that filename is bundled.
    """
    if filename not in _CACHED_SCHEMAS:
        with open(SCHEMA_DIR / filename, encoding="utf-8") as f:
            _CACHED_SCHEMAS[filename] = json.load(f)
    return _CACHED_SCHEMAS[filename]
