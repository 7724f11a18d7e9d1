"""HTML transcript formatter.

WHY: A transcript that opens in any browser with speaker labels in bold,
for sharing with people who will not read plain text files.

HOW: A minimal document (doctype, title, one style rule) whose body holds
one ``[HH:MM:SS] <span class="speaker">...</span>: text<br>`` row per
Line. The time is truncated to whole seconds, as in the text format.

RULES:
- The speaker template is applied, then escaped: markup in the template
  is shown as text, not parsed
- Line text is escaped the same way
- The line-break option does not apply; every row ends with <br>
"""

from __future__ import annotations

from html import escape
from typing import List

from transcript_converter.core.ir import Line
from transcript_converter.formatters.base import (
    BaseFormatter,
    FormatterOutput,
    RenderOptions,
    format_clock,
    truncated_seconds,
)

_HEADER = """<!DOCTYPE html>
<html>
<head>
<title>Transcription</title>
<style>
.speaker { font-weight: bold; }
</style>
</head>
<body>
"""

_FOOTER = """</body>
</html>
"""


class HTMLFormatter(BaseFormatter):
    """Formatter that produces a standalone HTML page."""

    @property
    def name(self) -> str:
        return "HTML"

    @property
    def media_type(self) -> str:
        return "text/html"

    def format(self, lines: List[Line], options: RenderOptions) -> FormatterOutput:
        parts: List[str] = [_HEADER]
        for line in lines:
            parts.append('[{}] <span class="speaker">{}</span>: {}<br>\n'.format(
                format_clock(truncated_seconds(line.time)),
                escape(options.speaker_label(line.speaker)),
                escape(line.text),
            ))
        parts.append(_FOOTER)
        return FormatterOutput(content="".join(parts), media_type=self.media_type)
