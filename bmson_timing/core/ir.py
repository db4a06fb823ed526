"""Intermediate representation dataclasses for chart timing.

WHY: bmson stores tempo changes and stops as two separate arrays with
different field names. The normalizer needs typed records for its input,
and downstream pulse→time mappers need a single well-typed record for
its output. These dataclasses are that contract.

HOW: Three frozen dataclasses:
  TempoChangeEvent — one bpm change at a pulse (input)
  PauseEvent       — one stop of some duration at a pulse (input)
  TimingDirective  — the merged tempo/stop change at a pulse (output)

RULES:
- All records are immutable (frozen=True); the normalizer builds new ones
- Pulses keep the numeric type the caller supplied (normally int)
- A TimingDirective always carries bpm, stop, or both — never neither
- Absent fields are None, never 0
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

Pulse = int
Number = Union[int, float]


@dataclass(frozen=True)
class TempoChangeEvent:
    """An instantaneous tempo change to ``bpm`` at ``pulse``.

    RULES:
    - bpm is assumed finite and positive; only strict mode checks it
    """

    pulse: Pulse
    bpm: Number


@dataclass(frozen=True)
class PauseEvent:
    """A stop of ``duration`` inserted at ``pulse``.

    The duration is in the chart's own stop units (pulses for bmson),
    converted to seconds only by a downstream time mapper.
    """

    pulse: Pulse
    duration: Number


@dataclass(frozen=True)
class TimingDirective:
    """One normalized timing change at a pulse.

    WHY: Downstream time mapping walks a single ordered list and needs
    to know, at each pulse, whether the tempo changes and whether time
    stops. Combining both into one record removes every ordering
    question for the consumer.

    RULES:
    - bpm: new tempo if it differs from the previously emitted one, else None
    - stop: summed stop duration at this pulse if > 0, else None
    - At least one of bpm / stop is not None
    """

    pulse: Pulse
    bpm: Number | None = None
    stop: Number | None = None

