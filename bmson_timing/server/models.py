"""Pydantic request/response models for the HTTP API.

WHY: The FastAPI endpoints need typed schemas for request validation,
response serialization, and automatic OpenAPI documentation.

HOW: Each endpoint has its own request and/or response model. Enums
represent closed sets like output format names. All models include
Field descriptions for rich OpenAPI docs.

RULES:
- All models use Field(description=...) for OpenAPI documentation
- Enum values match keys in bmson_timing.formatters.FORMATTERS exactly
- Pulses are integers >= 0; tempo and stop values are plain numbers
  (range checks belong to strict mode, not to the schema)
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from bmson_timing.core.ir import Number, PauseEvent, TempoChangeEvent, TimingDirective


class OutputFormat(str, Enum):
    """Available output format identifiers."""

    timing_json = "timing_json"
    timing_table = "timing_table"


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class TempoEventModel(BaseModel):
    pulse: int = Field(ge=0, description="Pulse position of the tempo change.")
    bpm: Number = Field(description="New tempo in beats per minute.")

    def to_event(self) -> TempoChangeEvent:
        return TempoChangeEvent(pulse=self.pulse, bpm=self.bpm)


class PauseEventModel(BaseModel):
    pulse: int = Field(ge=0, description="Pulse position of the stop.")
    duration: Number = Field(description="Stop duration in the chart's stop units.")

    def to_event(self) -> PauseEvent:
        return PauseEvent(pulse=self.pulse, duration=self.duration)


class NormalizeRequest(BaseModel):
    """Raw timing events to merge.

    RULES:
    - Event lists may be empty, unsorted, and share pulses
    - strict defaults to the server's BMSON_TIMING_STRICT setting when omitted
    """

    initial_tempo: Number = Field(description="Tempo in effect at pulse 0.")
    tempo_events: List[TempoEventModel] = Field(
        default_factory=list,
        description="Tempo changes in any order.",
    )
    pause_events: List[PauseEventModel] = Field(
        default_factory=list,
        description="Stops in any order.",
    )
    strict: Optional[bool] = Field(
        default=None,
        description="Reject non-positive tempos and negative stops.",
    )

    model_config = {"json_schema_extra": {
        "examples": [
            {
                "initial_tempo": 120,
                "tempo_events": [{"pulse": 480, "bpm": 140}],
                "pause_events": [{"pulse": 480, "duration": 2}],
            }
        ]
    }}


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class DirectiveModel(BaseModel):
    pulse: int = Field(description="Pulse position of this timing change.")
    bpm: Optional[Number] = Field(default=None, description="New tempo, or null if unchanged.")
    stop: Optional[Number] = Field(default=None, description="Total stop duration, or null.")

    @classmethod
    def from_directive(cls, directive: TimingDirective) -> "DirectiveModel":
        return cls(pulse=directive.pulse, bpm=directive.bpm, stop=directive.stop)


class NormalizeResponse(BaseModel):
    """Normalized timing structure, ascending by pulse."""

    directives: List[DirectiveModel] = Field(description="Ordered timing directives.")

    model_config = {"json_schema_extra": {
        "examples": [
            {
                "directives": [
                    {"pulse": 0, "bpm": 120, "stop": None},
                    {"pulse": 480, "bpm": 140, "stop": 2},
                ]
            }
        ]
    }}


class FormatInfo(BaseModel):
    """Description of an available output format."""

    key: str = Field(description="Format identifier used in API requests.")
    name: str = Field(description="Human-readable format name.")
    suffix: str = Field(description="File suffix produced (e.g. '-timing.json').")


class ErrorResponse(BaseModel):
    """Standard error response body."""

    detail: str = Field(description="Human-readable error description.")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Service health status.", json_schema_extra={"example": "ok"})
    version: str = Field(description="API version string.", json_schema_extra={"example": "0.1.0"})
