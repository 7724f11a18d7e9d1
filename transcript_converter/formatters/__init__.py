"""Output formatter registry: pluggable format hub.

WHY: The CLI needs a single lookup to find the right formatter by the
name given in ``--format``. A central dict makes it trivial to add new
formats: create the formatter class, import it here, add one line.

HOW: FORMATTERS maps string keys to formatter *classes* (not instances).
Callers instantiate as needed: ``formatter = FORMATTERS["html"]()``.

RULES:
- Keys are the --format choices of the CLI
- Values are BaseFormatter subclasses (not instances)
- Every formatter listed here must be importable without side effects
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from transcript_converter.formatters.html import HTMLFormatter
from transcript_converter.formatters.json_transcript import JSONFormatter
from transcript_converter.formatters.text import TextFormatter

if TYPE_CHECKING:
    from transcript_converter.formatters.base import BaseFormatter

FORMATTERS: dict[str, type[BaseFormatter]] = {
    "text": TextFormatter,
    "html": HTMLFormatter,
    "json": JSONFormatter,
}
