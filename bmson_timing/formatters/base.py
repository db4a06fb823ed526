"""Abstract base formatter and output container.

WHY: Every output format consumes the same list of TimingDirective records
but produces different file content. This base class enforces a consistent
interface so the CLI and HTTP layers can work with any formatter generically.

HOW: BaseFormatter is an ABC with three requirements — ``name`` and
``suffix`` properties and a ``format()`` method. FormatterOutput is a plain
dataclass that bundles a file suffix with its content and MIME type.

RULES:
- Subclasses MUST implement ``name``, ``suffix``, and ``format()``
- ``format()`` returns a list so multi-file formats stay possible
- ``suffix`` starts with a hyphen, e.g. ``"-timing.json"``
- The caller is responsible for prepending the source filename stem
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

from bmson_timing.core.ir import TimingDirective


@dataclass
class FormatterOutput:
    """One output file produced by a formatter.

    Attributes:
        suffix: File suffix appended to the source stem,
                e.g. ``"-timing.json"`` → ``"song-timing.json"``.
        content: The file content as a string or bytes.
        media_type: MIME type for the content, e.g. ``"application/json"``.
    """

    suffix: str
    content: str | bytes
    media_type: str


class BaseFormatter(ABC):
    """Abstract base for all output formatters.

    To add a new output format:
    1. Create a new file in formatters/
    2. Subclass BaseFormatter
    3. Implement name, suffix, and format()
    4. Register in FORMATTERS dict in formatters/__init__.py
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'Timing JSON'."""

    @property
    @abstractmethod
    def suffix(self) -> str:
        """File suffix this formatter produces, e.g. '-timing.json'."""

    @abstractmethod
    def format(self, directives: Sequence[TimingDirective]) -> list[FormatterOutput]:
        """Convert normalized directives into one or more output files.

        Args:
            directives: Output of the normalizer, ascending by pulse.

        Returns:
            List of FormatterOutput objects, each containing a file suffix,
            content, and MIME type.
        """
