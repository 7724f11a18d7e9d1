"""Plain text transcript formatter, one timestamped line per speaker turn.

WHY: The default output. Readable in a terminal, greppable, and easy to
diff between runs.

HOW: Each Line becomes ``[HH:MM:SS] <speaker> <text>``. The time is
truncated to whole seconds. In "auto" line-break mode every line is
followed by a blank line.

RULES:
- Time truncated, not rounded
- Speaker string is the template with "{}" replaced by the label
- "auto": "\\n\\n" after each line; "manual": "\\n"
- No lines → empty output
"""

from __future__ import annotations

from typing import List

from transcript_converter.config import LINE_BREAK_AUTO
from transcript_converter.core.ir import Line
from transcript_converter.formatters.base import (
    BaseFormatter,
    FormatterOutput,
    RenderOptions,
    format_clock,
    truncated_seconds,
)


class TextFormatter(BaseFormatter):
    """Formatter that produces ``[HH:MM:SS] speaker text`` lines."""

    @property
    def name(self) -> str:
        return "Plain Text"

    @property
    def media_type(self) -> str:
        return "text/plain"

    def format(self, lines: List[Line], options: RenderOptions) -> FormatterOutput:
        extra_break = "\n" if options.line_break == LINE_BREAK_AUTO else ""
        parts: List[str] = []
        for line in lines:
            parts.append("[{}] {} {}{}\n".format(
                format_clock(truncated_seconds(line.time)),
                options.speaker_label(line.speaker),
                line.text,
                extra_break,
            ))
        return FormatterOutput(content="".join(parts), media_type=self.media_type)
