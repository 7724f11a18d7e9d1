"""Abstract base formatter, render options and shared time formatting.

WHY: Every output format consumes the same ordered Line list but produces
different content. This base class enforces a consistent interface so the
CLI can work with any formatter generically.

HOW: BaseFormatter is an ABC with three requirements: a ``name``
property, a ``media_type`` property and a ``format()`` method.
RenderOptions bundles the user's formatting choices. FormatterOutput is a
plain dataclass pairing the rendered content with its MIME type.

RULES:
- Formatters are pure: no I/O, no mutation of the Line list
- ``format()`` must not fail on any valid Line input
- Speaker labels are substituted by plain replacement of every "{}" in
  the template; other braces are left alone
- Clock strings are HH:MM:SS with hours not wrapped at 24
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List

from transcript_converter.config import (
    DEFAULT_JSON_TIME,
    DEFAULT_LINE_BREAK,
    DEFAULT_SPEAKER_FORMAT,
    SPEAKER_PLACEHOLDER,
)
from transcript_converter.core.ir import Line


@dataclass(frozen=True)
class RenderOptions:
    """User-selected formatting options shared by all formatters.

    Attributes:
        speaker_format: Template whose "{}" is replaced by the speaker label.
        line_break: "auto" adds a blank line after each text-format line,
                    "manual" does not.
        json_time: "round" (legacy) or "truncate" seconds in JSON output.
    """

    speaker_format: str = DEFAULT_SPEAKER_FORMAT
    line_break: str = DEFAULT_LINE_BREAK
    json_time: str = DEFAULT_JSON_TIME

    def speaker_label(self, speaker: str) -> str:
        return self.speaker_format.replace(SPEAKER_PLACEHOLDER, speaker)


@dataclass
class FormatterOutput:
    """The rendered transcript.

    Attributes:
        content: The complete output text.
        media_type: MIME type for the content, e.g. ``"text/html"``.
    """

    content: str
    media_type: str


def truncated_seconds(time: float) -> int:
    """Whole seconds, dropping the fraction (text and HTML formats)."""
    return int(time)


def rounded_seconds(time: float) -> int:
    """Whole seconds, rounding halves away from zero (legacy JSON format)."""
    return int(math.copysign(math.floor(abs(time) + 0.5), time))


def format_clock(total_seconds: int) -> str:
    """Format whole seconds as ``HH:MM:SS``."""
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    return "{:02}:{:02}:{:02}".format(hours, minutes, seconds)


class BaseFormatter(ABC):
    """Abstract base for all output formatters.

    To add a new output format:
    1. Create a new file in formatters/
    2. Subclass BaseFormatter
    3. Implement name, media_type and format()
    4. Register in FORMATTERS dict in formatters/__init__.py
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'Plain Text'."""

    @property
    @abstractmethod
    def media_type(self) -> str:
        """MIME type of the rendered content."""

    @abstractmethod
    def format(self, lines: List[Line], options: RenderOptions) -> FormatterOutput:
        """Render the ordered lines.

        Args:
            lines: Reconstructed lines, already sorted by time.
            options: Speaker template, line-break mode and JSON time mode.

        Returns:
            FormatterOutput holding the complete rendered content.
        """
