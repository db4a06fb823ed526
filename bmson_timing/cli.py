"""Command-line interface for the bmson timing normalizer.

WHY: Chart authors and build scripts need a simple way to extract the
normalized timing structure from bmson files. The CLI wires together the
full pipeline — file validation, bmson schema validation, normalization,
pluggable formatter output, and file saving — behind a single command.

HOW: Uses argparse to accept one or more chart files, format selection,
strictness, and an output directory. Each chart is processed
independently; status messages go to stderr and output files are saved
next to the chart (or to --output-dir). With --stdout the first selected
format is printed instead of saved.

RULES:
- Positional arguments: one or more bmson file paths
- Validates file extension against BMSON_SUPPORTED_EXTENSIONS before reading
- --formats: comma-separated formatter keys (default: BMSON_TIMING_FORMATS or all)
- Output naming: {stem}{suffix}, numeric suffix for conflicts (-timing-2.json)
- Status output goes to stderr (not stdout)
- --stdout accepts exactly one input file
- Any error exits with status 1 after reporting it on stderr
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import jsonschema

from bmson_timing.adapters.bmson_adapter import load_bmson, normalize_bmson
from bmson_timing.config import (
    BMSON_SUPPORTED_EXTENSIONS,
    DEFAULT_FORMATS,
    DEFAULT_STRICT,
    LOG_LEVEL,
    parse_format_list,
    resolve_log_level,
)
from bmson_timing.core.normalizer import TimingValidationError
from bmson_timing.formatters import FORMATTERS
from bmson_timing.formatters.base import FormatterOutput

logger = logging.getLogger(__name__)


class CLIError(Exception):
    """A user-facing error that aborts the run with exit status 1."""


def _status(msg: str) -> None:
    """Print a status message to stderr.

    Status output must not pollute stdout so --stdout can be piped.
    """
    print(msg, file=sys.stderr, flush=True)


def _resolve_output_path(
    stem: str,
    suffix: str,
    output_dir: Path,
) -> Path:
    """Resolve the output file path, adding numeric suffix on conflict.

    RULES:
    - First attempt: {stem}{suffix} (e.g. song-timing.json)
    - Conflict: split suffix at last dot, insert counter before extension
      (e.g. song-timing-2.json)
    - Counter starts at 2 and increments
    """
    base_path = output_dir / "{}{}".format(stem, suffix)
    if not base_path.exists():
        return base_path

    dot_idx = suffix.rfind(".")
    if dot_idx > 0:
        suffix_name = suffix[:dot_idx]
        suffix_ext = suffix[dot_idx:]
    else:
        suffix_name = suffix
        suffix_ext = ""

    counter = 2
    while True:
        candidate = output_dir / "{}{}-{}{}".format(stem, suffix_name, counter, suffix_ext)
        if not candidate.exists():
            return candidate
        counter += 1


def _save_output(
    output: FormatterOutput,
    stem: str,
    output_dir: Path,
) -> Path:
    """Save a single formatter output to disk and return where it went."""
    path = _resolve_output_path(stem, output.suffix, output_dir)

    if isinstance(output.content, bytes):
        path.write_bytes(output.content)
    else:
        path.write_text(output.content, encoding="utf-8")

    return path


def _select_formats(formats_arg: Optional[str]) -> List[str]:
    """Resolve the formatter keys to run.

    --formats wins over BMSON_TIMING_FORMATS; neither means all formats.
    """
    format_keys = parse_format_list(formats_arg) or list(DEFAULT_FORMATS)
    if not format_keys:
        return list(FORMATTERS.keys())

    for key in format_keys:
        if key not in FORMATTERS:
            available = ", ".join(sorted(FORMATTERS.keys()))
            raise CLIError("Unknown format '{}'. Available formats: {}".format(key, available))
    return format_keys


def _validate_input_path(input_path: Path) -> None:
    if not input_path.is_file():
        raise CLIError("File not found: {}".format(input_path))

    ext = input_path.suffix.lower()
    if ext not in BMSON_SUPPORTED_EXTENSIONS:
        raise CLIError(
            "Unsupported file type '{}'. Supported formats: {}".format(
                ext, ", ".join(sorted(BMSON_SUPPORTED_EXTENSIONS))
            )
        )


def _process_file(
    input_path: Path,
    format_keys: List[str],
    output_dir: Optional[Path],
    strict: bool,
    to_stdout: bool,
) -> List[Path]:
    """Normalize one chart and write its outputs.

    Returns:
        The saved output paths (empty when writing to stdout).
    """
    _validate_input_path(input_path)
    _status("Reading {}...".format(input_path.name))

    try:
        document = load_bmson(input_path)
    except json.JSONDecodeError as e:
        raise CLIError("Invalid JSON in {}: {}".format(input_path.name, e)) from e

    try:
        directives = normalize_bmson(document, strict=strict)
    except jsonschema.ValidationError as e:
        raise CLIError("Invalid bmson timing data in {}: {}".format(input_path.name, e.message)) from e
    except TimingValidationError as e:
        raise CLIError("{}: {}".format(input_path.name, e)) from e

    _status("  {} timing directives".format(len(directives)))

    if to_stdout:
        formatter = FORMATTERS[format_keys[0]]()
        for output in formatter.format(directives):
            content = output.content
            if isinstance(content, bytes):
                content = content.decode("utf-8")
            sys.stdout.write(content)
        sys.stdout.flush()
        return []

    target_dir = output_dir if output_dir is not None else input_path.parent
    saved_files: List[Path] = []
    for key in format_keys:
        formatter = FORMATTERS[key]()
        for output in formatter.format(directives):
            saved_path = _save_output(output, input_path.stem, target_dir)
            saved_files.append(saved_path)
            _status("  Saved: {}".format(saved_path.name))
    return saved_files


def run(args: argparse.Namespace) -> None:
    """Execute the pipeline for every input file.

    Raises:
        CLIError: On the first file that cannot be processed.
    """
    if args.stdout and len(args.input_files) > 1:
        raise CLIError("--stdout accepts a single input file")

    format_keys = _select_formats(args.formats)
    logger.debug("Selected formats: %s (strict=%s)", ", ".join(format_keys), args.strict)

    output_dir: Optional[Path] = None
    if args.output_dir:
        output_dir = Path(args.output_dir).resolve()
        if not output_dir.is_dir():
            raise CLIError("Output directory does not exist: {}".format(output_dir))

    saved_files: List[Path] = []
    for input_file in args.input_files:
        saved_files.extend(
            _process_file(
                Path(input_file).resolve(),
                format_keys,
                output_dir,
                args.strict,
                args.stdout,
            )
        )

    if saved_files:
        _status("")
        _status("Done! Saved {} file(s)".format(len(saved_files)))


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    Separate from main() so tests can inspect the parser without running
    the pipeline.
    """
    parser = argparse.ArgumentParser(
        prog="bmson_timing",
        description="Merge bmson bpm_events and stop_events into a normalized, "
                    "ordered timing structure.",
    )

    parser.add_argument(
        "input_files",
        nargs="+",
        help="Path(s) to the bmson chart file(s) to normalize.",
    )

    parser.add_argument(
        "--formats",
        default=None,
        help="Comma-separated list of output formats. "
             "Available: {}. Default: all.".format(", ".join(sorted(FORMATTERS.keys()))),
    )

    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory to save output files (default: same as input file).",
    )

    parser.add_argument(
        "--strict",
        action=argparse.BooleanOptionalAction,
        default=DEFAULT_STRICT,
        help="Reject non-positive tempos and negative stops (default: %(default)s).",
    )

    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Write the first selected format to stdout instead of saving files.",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    try:
        level = resolve_log_level(LOG_LEVEL)
    except ValueError as e:
        print("Error: {}".format(e), file=sys.stderr)
        sys.exit(1)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        run(args)
    except CLIError as e:
        print("Error: {}".format(e), file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        _status("\nCancelled by user.")
        sys.exit(130)


if __name__ == "__main__":
    main()
