"""Merge tempo and stop events into an ordered list of timing directives.

WHY: bmson keeps bpm_events and stop_events in separate, unordered arrays
that may collide on the same pulse and may repeat the current tempo.
A pulse→time mapper needs one strictly ordered list with at most one
change per pulse and no redundant tempo entries.

HOW: Tag every event with its kind, prepend a synthetic tempo event at
pulse 0 carrying the initial tempo, and stable-sort by pulse only. Then
fold over the distinct pulses, carrying the last emitted bpm and the
directives built so far. At each pulse the last tempo event wins and
all stop durations are summed.

RULES:
- Stable sort on pulse only — never on (pulse, kind)
- Multiple tempo events at one pulse → the last one in input order wins
- Multiple stops at one pulse → durations add up
- bpm is emitted only when it differs from the last emitted bpm
- The last emitted bpm starts unset, so pulse 0 always carries a bpm
- stop is emitted only when the summed duration is > 0
- A pulse with neither bpm nor stop produces no directive
- strict=True rejects non-finite / non-positive bpm and negative stops
  before any merging happens
"""

from __future__ import annotations

import logging
import math
from functools import reduce
from itertools import groupby
from typing import Iterable, List, NamedTuple, Optional, Sequence, Tuple

from bmson_timing.core.ir import Number, PauseEvent, TempoChangeEvent, TimingDirective

logger = logging.getLogger(__name__)

_TEMPO = "bpm"
_STOP = "stop"


class TimingValidationError(ValueError):
    """Raised in strict mode when a tempo or stop value is unusable."""


class _TaggedEvent(NamedTuple):
    kind: str
    pulse: Number
    value: Number


# Fold accumulator: (last emitted bpm or None, directives so far)
_ScanState = Tuple[Optional[Number], Tuple[TimingDirective, ...]]


def validate_timing_inputs(
    initial_tempo: Number,
    tempo_events: Iterable[TempoChangeEvent],
    pause_events: Iterable[PauseEvent],
) -> None:
    """Reject values that would silently corrupt downstream timing.

    RULES:
    - initial_tempo and every bpm must be finite and > 0
    - every stop duration must be finite and >= 0
    - The first offending value raises; nothing is partially accepted

    Raises:
        TimingValidationError: On the first invalid value found.
    """
    if not _is_positive_finite(initial_tempo):
        raise TimingValidationError(
            "Initial tempo must be a finite positive number, got {!r}".format(initial_tempo)
        )
    for event in tempo_events:
        if not _is_positive_finite(event.bpm):
            raise TimingValidationError(
                "Tempo change at pulse {} must be a finite positive number, got {!r}".format(
                    event.pulse, event.bpm
                )
            )
    for event in pause_events:
        if not math.isfinite(event.duration) or event.duration < 0:
            raise TimingValidationError(
                "Stop at pulse {} must have a finite non-negative duration, got {!r}".format(
                    event.pulse, event.duration
                )
            )


def _is_positive_finite(value: Number) -> bool:
    return math.isfinite(value) and value > 0


def _tag_events(
    initial_tempo: Number,
    tempo_events: Iterable[TempoChangeEvent],
    pause_events: Iterable[PauseEvent],
) -> List[_TaggedEvent]:
    """Build the unified event list, sorted stably by pulse only."""
    unsorted = [_TaggedEvent(_TEMPO, 0, initial_tempo)]
    unsorted.extend(_TaggedEvent(_TEMPO, e.pulse, e.bpm) for e in tempo_events)
    unsorted.extend(_TaggedEvent(_STOP, e.pulse, e.duration) for e in pause_events)
    # sorted() is stable; keying on pulse alone keeps input order on ties
    return sorted(unsorted, key=lambda e: e.pulse)


def _merge_pulse(state: _ScanState, group: Tuple[Number, List[_TaggedEvent]]) -> _ScanState:
    """Fold step: merge every event sharing one pulse into at most one directive."""
    last_bpm, directives = state
    pulse, events = group

    tempo_candidates = [e.value for e in events if e.kind == _TEMPO]
    stop_duration = sum((e.value for e in events if e.kind == _STOP), 0)

    bpm = None
    if tempo_candidates and tempo_candidates[-1] != last_bpm:
        bpm = tempo_candidates[-1]
        last_bpm = bpm

    stop = stop_duration if stop_duration > 0 else None

    if bpm is None and stop is None:
        return last_bpm, directives
    return last_bpm, directives + (TimingDirective(pulse=pulse, bpm=bpm, stop=stop),)


def normalize(
    initial_tempo: Number,
    tempo_events: Sequence[TempoChangeEvent],
    pause_events: Sequence[PauseEvent],
    strict: bool = False,
) -> List[TimingDirective]:
    """Merge an initial tempo, tempo changes, and stops into timing directives.

    Args:
        initial_tempo: Tempo in effect at pulse 0 before any event applies.
        tempo_events: Tempo changes in any order, possibly sharing pulses.
        pause_events: Stops in any order, possibly sharing pulses.
        strict: Validate every tempo and stop value first and fail fast.

    Returns:
        Directives strictly ascending by pulse. The first one is always at
        pulse 0 and carries a bpm.

    Raises:
        TimingValidationError: Only when strict=True and a value is invalid.
    """
    if strict:
        validate_timing_inputs(initial_tempo, tempo_events, pause_events)

    sorted_events = _tag_events(initial_tempo, tempo_events, pause_events)
    groups = ((pulse, list(events)) for pulse, events in groupby(sorted_events, key=lambda e: e.pulse))

    initial_state: _ScanState = (None, ())
    _, directives = reduce(_merge_pulse, groups, initial_state)

    logger.debug(
        "Normalized %d tempo and %d stop events into %d directives",
        len(tempo_events), len(pause_events), len(directives),
    )
    return list(directives)


class TimingEventNormalizer:
    """Reusable normalizer carrying a strictness setting.

    WHY: The CLI and HTTP service configure strictness once (from .env or
    a request flag) and then normalize many charts with it.
    """

    def __init__(self, strict: bool = False) -> None:
        self.strict = strict

    def normalize(
        self,
        initial_tempo: Number,
        tempo_events: Sequence[TempoChangeEvent],
        pause_events: Sequence[PauseEvent],
    ) -> List[TimingDirective]:
        return normalize(initial_tempo, tempo_events, pause_events, strict=self.strict)
