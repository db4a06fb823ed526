"""Timing structure JSON formatter.

WHY: Pulse→time mappers written in other languages (game engines, web
players) read the timing structure as JSON. The array-of-objects shape
with ``y`` / ``bpm`` / ``stop`` keys and explicit nulls matches what bmson
players already consume.

HOW: Each TimingDirective becomes ``{"y": pulse, "bpm": ..., "stop": ...}``
with absent values written as null. The array is validated against
timing_structure_schema.json with jsonschema before returning.

RULES:
- One object per directive, in directive order
- Keys are always present; absent values are null, never omitted
- Output suffix: "-timing.json"
- Validate output against the schema before returning; raise on failure
"""

from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List, Sequence

import jsonschema

from bmson_timing.core.ir import TimingDirective
from bmson_timing.formatters.base import BaseFormatter, FormatterOutput
from bmson_timing.schemas import TIMING_STRUCTURE_SCHEMA, load_schema

def directive_to_dict(directive: TimingDirective) -> Dict[str, Any]:
    """Serialize one directive to the ``{"y", "bpm", "stop"}`` shape."""
    return {"y": directive.pulse, "bpm": directive.bpm, "stop": directive.stop}


def directives_from_dicts(items: Iterable[Dict[str, Any]]) -> List[TimingDirective]:
    """Rebuild directives from their serialized form.

    Accepts both ``y`` and ``pulse`` as the position key. Missing bpm/stop
    keys read as None.
    """
    return [
        TimingDirective(
            pulse=item["y"] if "y" in item else item["pulse"],
            bpm=item.get("bpm"),
            stop=item.get("stop"),
        )
        for item in items
    ]


class TimingJSONFormatter(BaseFormatter):
    """Formatter that produces the timing structure as a JSON array."""

    @property
    def name(self) -> str:
        return "Timing JSON"

    @property
    def suffix(self) -> str:
        return "-timing.json"

    def format(self, directives: Sequence[TimingDirective]) -> list[FormatterOutput]:
        """Serialize directives to JSON.

        Raises:
            jsonschema.ValidationError: If the directives do not form a
                valid timing structure (e.g. empty list, directive with
                neither bpm nor stop).
        """
        output = [directive_to_dict(d) for d in directives]
        jsonschema.validate(instance=output, schema=load_schema(TIMING_STRUCTURE_SCHEMA))

        content = json.dumps(output, indent=2)

        return [
            FormatterOutput(
                suffix=self.suffix,
                content=content,
                media_type="application/json",
            )
        ]
