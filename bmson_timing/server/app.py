"""FastAPI application exposing timing normalization over HTTP.

WHY: Chart editors, web players, and build pipelines that are not written
in Python need the same normalized timing structure the CLI produces.
FastAPI provides request validation and automatic OpenAPI documentation.

HOW: A single FastAPI app exposes four endpoints grouped by tags. POST
/normalize takes raw events as JSON and returns directives. POST /bmson
takes an uploaded chart and returns it rendered by one formatter. The
remaining endpoints list formats and report health. Everything runs
synchronously in the request; there is no job state.

RULES:
- Error responses use a consistent ErrorResponse schema
- Unreadable uploads (bad extension, bad JSON, schema violation) → 400
- Strict-mode violations → 422
- strict omitted in a request → server default (BMSON_TIMING_STRICT)
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated, List

import jsonschema
from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.responses import Response

from bmson_timing import __version__
from bmson_timing.adapters.bmson_adapter import normalize_bmson
from bmson_timing.config import API_HOST, API_PORT, BMSON_SUPPORTED_EXTENSIONS, DEFAULT_STRICT
from bmson_timing.core.normalizer import TimingEventNormalizer, TimingValidationError
from bmson_timing.formatters import FORMATTERS
from bmson_timing.server.models import (
    DirectiveModel,
    ErrorResponse,
    FormatInfo,
    HealthResponse,
    NormalizeRequest,
    NormalizeResponse,
    OutputFormat,
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="bmson Timing Normalizer API",
    description=(
        "Merge bmson tempo changes and stops into a normalized, ordered "
        "timing structure. Submit raw events or a whole chart file."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _validate_file_extension(filename: str) -> None:
    """Raise HTTPException if the file extension is not supported."""
    ext = Path(filename).suffix.lower()
    if ext not in BMSON_SUPPORTED_EXTENSIONS:
        raise HTTPException(
            status_code=400,
            detail="Unsupported file type '{}'. Supported formats: {}".format(
                ext, ", ".join(sorted(BMSON_SUPPORTED_EXTENSIONS))
            ),
        )


# ---------------------------------------------------------------------------
# Endpoints: Normalization
# ---------------------------------------------------------------------------


@app.post(
    "/normalize",
    response_model=NormalizeResponse,
    tags=["normalize"],
    summary="Normalize raw timing events",
    description=(
        "Merge an initial tempo, tempo changes, and stops into directives "
        "ordered by pulse, with redundant tempo changes removed and stops "
        "at the same pulse summed."
    ),
    responses={
        422: {"model": ErrorResponse, "description": "Invalid tempo or stop value in strict mode"},
    },
)
async def normalize_events(request: NormalizeRequest) -> NormalizeResponse:
    strict = DEFAULT_STRICT if request.strict is None else request.strict
    normalizer = TimingEventNormalizer(strict=strict)
    try:
        directives = normalizer.normalize(
            request.initial_tempo,
            [e.to_event() for e in request.tempo_events],
            [e.to_event() for e in request.pause_events],
        )
    except TimingValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return NormalizeResponse(
        directives=[DirectiveModel.from_directive(d) for d in directives],
    )


@app.post(
    "/bmson",
    tags=["normalize"],
    summary="Normalize an uploaded bmson chart",
    description=(
        "Upload a bmson file and receive its timing structure rendered by "
        "the selected output format."
    ),
    responses={
        200: {"description": "Formatted timing structure"},
        400: {"model": ErrorResponse, "description": "Unreadable or invalid chart"},
        422: {"model": ErrorResponse, "description": "Invalid tempo or stop value in strict mode"},
    },
)
async def normalize_chart(
    file: Annotated[UploadFile, File(description="bmson chart file.")],
    format: Annotated[OutputFormat, Form(description="Output format.")] = OutputFormat.timing_json,
    strict: Annotated[bool, Form(description="Reject non-positive tempos and negative stops.")] = DEFAULT_STRICT,
) -> Response:
    filename = file.filename or "chart.bmson"
    _validate_file_extension(filename)

    raw = await file.read()
    try:
        document = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise HTTPException(status_code=400, detail="Invalid JSON: {}".format(e))

    try:
        directives = normalize_bmson(document, strict=strict)
    except jsonschema.ValidationError as e:
        raise HTTPException(status_code=400, detail="Invalid bmson timing data: {}".format(e.message))
    except TimingValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))

    formatter = FORMATTERS[format.value]()
    try:
        output = formatter.format(directives)[0]
    except jsonschema.ValidationError:
        logger.exception("Formatter %s produced invalid output for %s", format.value, filename)
        raise

    download_name = "{}{}".format(Path(filename).stem, output.suffix)
    return Response(
        content=output.content,
        media_type=output.media_type,
        headers={"Content-Disposition": 'attachment; filename="{}"'.format(download_name)},
    )


# ---------------------------------------------------------------------------
# Endpoints: Formats
# ---------------------------------------------------------------------------


@app.get(
    "/formats",
    response_model=List[FormatInfo],
    tags=["formats"],
    summary="List available output formats",
    description="Returns all supported output formats with identifiers, names, and suffixes.",
)
async def list_formats() -> List[FormatInfo]:
    result = []
    for key, formatter_cls in sorted(FORMATTERS.items()):
        formatter = formatter_cls()
        result.append(FormatInfo(key=key, name=formatter.name, suffix=formatter.suffix))
    return result


# ---------------------------------------------------------------------------
# Endpoints: Health
# ---------------------------------------------------------------------------


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["health"],
    summary="Health check",
    description="Liveness and readiness check for load balancers and orchestrators.",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


def run_api():
    """Entry point for the bmson-timing-api console script."""
    import uvicorn
    uvicorn.run(app, host=API_HOST, port=API_PORT)
