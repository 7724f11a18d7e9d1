"""JSON transcript formatter.

WHY: Machine-readable output for downstream tools (search indexing,
subtitle editors, analytics) that should not have to parse text lines.

HOW: Builds ``{"transcription": [{"time", "speaker", "line"}, ...]}``,
validates it with jsonschema against the packaged output schema, and
serializes it with two-space indentation.

RULES:
- "speaker" is the raw label; the speaker template does not apply
- "time" is HH:MM:SS from the ROUNDED whole seconds by default. Text and
  HTML truncate instead; existing consumers depend on the rounding, so
  truncation is opt-in via json_time="truncate"
- Non-ASCII text is written as-is (ensure_ascii=False)
- Validate output against the schema before returning; raise on failure
"""

from __future__ import annotations

import json
from typing import Any, Dict, List

import jsonschema

from transcript_converter.config import JSON_TIME_TRUNCATE
from transcript_converter.core.ir import Line
from transcript_converter.formatters.base import (
    BaseFormatter,
    FormatterOutput,
    RenderOptions,
    format_clock,
    rounded_seconds,
    truncated_seconds,
)
from transcript_converter.schemas import TRANSCRIPT_OUTPUT, load_schema


class JSONFormatter(BaseFormatter):
    """Formatter that produces a ``{"transcription": [...]}`` document."""

    @property
    def name(self) -> str:
        return "JSON"

    @property
    def media_type(self) -> str:
        return "application/json"

    def format(self, lines: List[Line], options: RenderOptions) -> FormatterOutput:
        """Render the lines as a JSON document.

        Raises:
            jsonschema.ValidationError: If the generated document does not
                conform to the output schema.
        """
        to_seconds = (
            truncated_seconds if options.json_time == JSON_TIME_TRUNCATE else rounded_seconds
        )
        output: Dict[str, Any] = {
            "transcription": [
                {
                    "time": format_clock(to_seconds(line.time)),
                    "speaker": line.speaker,
                    "line": line.text,
                }
                for line in lines
            ],
        }

        jsonschema.validate(instance=output, schema=load_schema(TRANSCRIPT_OUTPUT))

        content = json.dumps(output, indent=2, ensure_ascii=False) + "\n"
        return FormatterOutput(content=content, media_type=self.media_type)
