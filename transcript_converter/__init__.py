"""Transcript Converter: speaker-attributed transcripts from ASR JSON output.

WHY: The speech-recognition service returns two loosely correlated streams:
word/punctuation items and speaker-diarization segments, both keyed by
timestamp strings. Neither is readable on its own. This package merges them
into speaker turns and renders those turns as text, HTML or JSON.

HOW: Three-stage pipeline: ingest (parse concatenated JSON documents),
reconstruct (fold items into speaker-attributed lines), format (pluggable
formatters). Each stage is independently testable.

RULES:
- All formatters consume the same ordered list of Line objects
- Adding a new output format = one new formatter module, no core changes
- Any parse, structure or I/O error aborts the run before output is written
"""

__version__ = "0.1.0"
