"""Output formatter registry — pluggable format hub.

WHY: The CLI and HTTP layers need a single lookup to find the right
formatter by name. A central dict makes it trivial to add new formats:
create the formatter class, import it here, add one line.

HOW: FORMATTERS maps string keys to formatter *classes* (not instances).
Callers instantiate as needed: ``formatter = FORMATTERS["timing_json"]()``.

RULES:
- Keys are snake_case identifiers (used in CLI flags, config, etc.)
- Values are BaseFormatter subclasses (not instances)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from bmson_timing.formatters.timing_json import TimingJSONFormatter
from bmson_timing.formatters.timing_table import TimingTableFormatter

if TYPE_CHECKING:
    from bmson_timing.formatters.base import BaseFormatter

FORMATTERS: dict[str, type[BaseFormatter]] = {
    "timing_json": TimingJSONFormatter,
    "timing_table": TimingTableFormatter,
}
