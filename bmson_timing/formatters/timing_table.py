"""Plain text timing table formatter.

WHY: Chart authors debugging a tempo map want to eyeball where the tempo
changes and where time stops, without reading JSON.

HOW: A header row followed by one right-aligned row per directive.
Absent values are shown as "-".

RULES:
- Columns: pulse, bpm, stop
- Numbers are printed with repr-style formatting (no rounding)
- No trailing whitespace on any line; file ends with a newline
- Output suffix: "-timing.txt"
- Media type: "text/plain"
"""

from __future__ import annotations

from typing import List, Sequence

from bmson_timing.core.ir import Number, TimingDirective
from bmson_timing.formatters.base import BaseFormatter, FormatterOutput

_HEADER = ("pulse", "bpm", "stop")
_ABSENT = "-"


def _cell(value: Number | None) -> str:
    if value is None:
        return _ABSENT
    return "{!r}".format(value)


def _render_table(rows: List[Sequence[str]]) -> str:
    widths = [max(len(row[i]) for row in rows) for i in range(len(_HEADER))]
    lines = []
    for row in rows:
        cells = [cell.rjust(width) for cell, width in zip(row, widths)]
        lines.append("  ".join(cells).rstrip())
    return "\n".join(lines) + "\n"


class TimingTableFormatter(BaseFormatter):
    """Formatter that renders directives as an aligned text table."""

    @property
    def name(self) -> str:
        return "Timing table"

    @property
    def suffix(self) -> str:
        return "-timing.txt"

    def format(self, directives: Sequence[TimingDirective]) -> list[FormatterOutput]:
        rows: List[Sequence[str]] = [_HEADER]
        for d in directives:
            rows.append((_cell(d.pulse), _cell(d.bpm), _cell(d.stop)))

        return [
            FormatterOutput(
                suffix=self.suffix,
                content=_render_table(rows),
                media_type="text/plain",
            )
        ]
