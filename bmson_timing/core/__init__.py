"""Core normalization and intermediate representation modules.

WHY: The core package is the stable heart of the normalizer — the IR
dataclasses and the merge logic that produces them. Adapters feed it,
formatters consume it, and neither may leak into it.

HOW: ir.py defines the event and directive records, normalizer.py merges
tempo and stop events into ordered TimingDirective lists.

RULES:
- IR dataclasses are the contract — change with care
- Normalization is format-agnostic — no bmson or JSON knowledge here
"""
