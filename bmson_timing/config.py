"""Configuration constants, supported extensions, and .env loading.

WHY: Centralizes every configurable value so it is easy to find and
override. Defaults for strictness, output formats, logging, and the HTTP
service live here as plain module-level constants rather than being
scattered through the CLI and server.

HOW: python-dotenv loads the .env file on import. Constants are read with
os.getenv and converted to their Python types once.

RULES:
- Every default can be overridden via a BMSON_TIMING_* environment variable
- BMSON_TIMING_LOG_LEVEL must name a standard logging level
- Boolean variables accept "true"/"1"/"yes" (case-insensitive)
- An empty BMSON_TIMING_FORMATS means "all registered formatters"
"""

from __future__ import annotations

import logging
import os
from typing import List, Optional

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()

_TRUTHY = frozenset({"true", "1", "yes"})


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in _TRUTHY


def parse_format_list(value: Optional[str]) -> List[str]:
    """Split a comma-separated format list, dropping blanks.

    RULES:
    - None or "" → [] (caller treats this as "all formats")
    - Whitespace around keys is stripped
    """
    if not value:
        return []
    return [key.strip() for key in value.split(",") if key.strip()]


def resolve_log_level(name: str) -> int:
    """Map a level name such as "debug" or "WARNING" to its logging constant.

    Raises:
        ValueError: If the name is not a standard logging level.
    """
    level = logging.getLevelName(name.strip().upper())
    if not isinstance(level, int):
        raise ValueError(
            "Unknown log level {!r} in BMSON_TIMING_LOG_LEVEL. "
            "Use DEBUG, INFO, WARNING, ERROR or CRITICAL.".format(name)
        )
    return level


# ---------------------------------------------------------------------------
# Input files
# ---------------------------------------------------------------------------

BMSON_SUPPORTED_EXTENSIONS: set[str] = {".bmson", ".json"}
"""Chart file extensions accepted by the CLI and HTTP upload (lowercase, with dot)."""

# ---------------------------------------------------------------------------
# Normalization / output defaults
# ---------------------------------------------------------------------------

DEFAULT_STRICT = _env_bool("BMSON_TIMING_STRICT", "false")
DEFAULT_FORMATS = parse_format_list(os.getenv("BMSON_TIMING_FORMATS", ""))
LOG_LEVEL = os.getenv("BMSON_TIMING_LOG_LEVEL", "WARNING").upper()

# ---------------------------------------------------------------------------
# HTTP service
# ---------------------------------------------------------------------------

API_HOST = os.getenv("BMSON_TIMING_HOST", "0.0.0.0")
API_PORT = int(os.getenv("BMSON_TIMING_PORT", "8000"))
