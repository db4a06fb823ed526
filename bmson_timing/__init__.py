"""bmson timing normalizer — canonical tempo/stop structure for bmson charts.

WHY: A bmson chart describes its timing with two independent, unordered
event arrays (bpm_events and stop_events) plus an initial tempo. Any code
that turns pulse positions into seconds first needs these merged into one
ordered, deduplicated list of timing changes.

HOW: Three-stage pipeline — adapt (read and validate the bmson document),
normalize (merge both event streams into TimingDirective records), format
(pluggable serializers). Each stage is independently testable.

RULES:
- All formatters consume the same list of TimingDirective records
- The normalizer is pure: no I/O, no shared state
- Adding a new output format = one new formatter module, no core changes
"""

__version__ = "0.1.0"
