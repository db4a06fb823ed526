"""Adapter: bmson document to normalizer input events.

WHY: The normalizer works on typed TempoChangeEvent / PauseEvent records
and never looks at chart files. A bmson document carries the same data
under its own names (info.init_bpm, bpm_events[].y/bpm,
stop_events[].y/duration) and must be checked before it is trusted.
This adapter is the upstream collaborator that does both.

HOW: validate_bmson() checks the timing-related part of the document
against bmson_timing_schema.json with jsonschema. extract_timing_events()
maps the validated arrays onto IR records. normalize_bmson() chains
validation, extraction, and normalization.

RULES:
- Only the timing fields are validated; notes, sound channels, etc. pass through
- Missing or null bpm_events / stop_events arrays mean "no events"
- Stop duration is read from "duration" (bmson 1.0), falling back to "value"
- The source document is never modified
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, NamedTuple

import jsonschema

from bmson_timing.core.ir import Number, PauseEvent, TempoChangeEvent, TimingDirective
from bmson_timing.core.normalizer import normalize
from bmson_timing.schemas import BMSON_TIMING_SCHEMA, load_schema

logger = logging.getLogger(__name__)


class TimingInput(NamedTuple):
    """Everything the normalizer needs from one chart."""

    initial_tempo: Number
    tempo_events: List[TempoChangeEvent]
    pause_events: List[PauseEvent]


def load_bmson(path: str | Path) -> Dict[str, Any]:
    """Read a bmson file from disk.

    Raises:
        FileNotFoundError: If the path does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
    """
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def validate_bmson(document: Dict[str, Any]) -> None:
    """Validate the timing fields of a bmson document.

    Raises:
        jsonschema.ValidationError: If info.init_bpm is missing or any
            bpm/stop event is malformed.
    """
    jsonschema.validate(instance=document, schema=load_schema(BMSON_TIMING_SCHEMA))


def _stop_duration(event: Dict[str, Any]) -> Number:
    if "duration" in event:
        return event["duration"]
    return event["value"]


def extract_timing_events(document: Dict[str, Any]) -> TimingInput:
    """Map a validated bmson document onto normalizer input records.

    Args:
        document: A bmson dict that has passed validate_bmson().

    Returns:
        TimingInput with the initial tempo and both event lists in
        document order.
    """
    tempo_events = [
        TempoChangeEvent(pulse=e["y"], bpm=e["bpm"])
        for e in document.get("bpm_events") or []
    ]
    pause_events = [
        PauseEvent(pulse=e["y"], duration=_stop_duration(e))
        for e in document.get("stop_events") or []
    ]
    logger.debug(
        "Extracted %d bpm events and %d stop events", len(tempo_events), len(pause_events)
    )
    return TimingInput(
        initial_tempo=document["info"]["init_bpm"],
        tempo_events=tempo_events,
        pause_events=pause_events,
    )


def normalize_bmson(document: Dict[str, Any], strict: bool = False) -> List[TimingDirective]:
    """Validate a bmson document and return its normalized timing structure.

    Raises:
        jsonschema.ValidationError: If the timing fields are malformed.
        TimingValidationError: If strict=True and a tempo/stop value is invalid.
    """
    validate_bmson(document)
    timing = extract_timing_events(document)
    return normalize(
        timing.initial_tempo,
        timing.tempo_events,
        timing.pause_events,
        strict=strict,
    )
