"""Adapter modules for converting external chart formats into normalizer input.

WHY: The normalizer only understands TempoChangeEvent / PauseEvent records.
Chart formats name and nest their timing data differently, so each format
gets an adapter that validates the document and maps it onto the IR.

RULES:
- Adapters never modify the source document
- Each adapter lives in its own module under this package
"""

from bmson_timing.adapters.bmson_adapter import (
    TimingInput,
    extract_timing_events,
    load_bmson,
    normalize_bmson,
    validate_bmson,
)

__all__ = [
    "TimingInput",
    "extract_timing_events",
    "load_bmson",
    "normalize_bmson",
    "validate_bmson",
]
