"""Shared test fixtures for the bmson_timing test suite.

WHY: Several test modules need the same sample chart — a bmson document
whose timing events collide on pulses, repeat the current tempo, and
carry zero-length stops — plus its expected normalized structure.

HOW: Pytest fixtures provide the raw bmson dict, the expected directive
list, and a helper that writes the chart to a temp directory.

RULES:
- The sample chart lists events out of order on purpose.
- SAMPLE_DIRECTIVES is derived by hand from SAMPLE_BMSON.
"""

import copy
import json
from typing import Any, Dict, List

import pytest

from bmson_timing.core.ir import TimingDirective


# ---------------------------------------------------------------------------
# Sample chart
# ---------------------------------------------------------------------------

SAMPLE_BMSON: Dict[str, Any] = {
    "version": "1.0.0",
    "info": {
        "title": "Sample",
        "artist": "Tester",
        "init_bpm": 150,
        "resolution": 240,
    },
    "bpm_events": [
        {"y": 1920, "bpm": 180},
        {"y": 960, "bpm": 150},    # same as init tempo → dropped
        {"y": 2880, "bpm": 90},
        {"y": 2880, "bpm": 120},   # collides with 90, last wins
        {"y": 3840, "bpm": 120},   # unchanged after 2880 → dropped
    ],
    "stop_events": [
        {"y": 2880, "duration": 120},
        {"y": 1440, "duration": 0},     # zero-length → dropped
        {"y": 2880, "duration": 60},    # accumulates with 120
        {"y": 3840, "duration": 240},   # stop only
    ],
    "sound_channels": [],
}

SAMPLE_DIRECTIVES: List[TimingDirective] = [
    TimingDirective(pulse=0, bpm=150),
    TimingDirective(pulse=1920, bpm=180),
    TimingDirective(pulse=2880, bpm=120, stop=180),
    TimingDirective(pulse=3840, stop=240),
]


@pytest.fixture
def sample_bmson():
    """A fresh deep copy of the sample chart (tests may mutate it)."""
    return copy.deepcopy(SAMPLE_BMSON)


@pytest.fixture
def sample_directives():
    """The normalized timing structure of the sample chart."""
    return list(SAMPLE_DIRECTIVES)


@pytest.fixture
def write_chart(tmp_path):
    """Write a chart dict to tmp_path and return the file path."""

    def _write(document, name="chart.bmson"):
        path = tmp_path / name
        path.write_text(json.dumps(document), encoding="utf-8")
        return path

    return _write
