"""Configuration defaults and .env loading.

WHY: Centralizes all configurable values so they are easy to find,
update, and override. CLI defaults are plain module-level constants,
not buried in argparse calls, so both the parser and the tests read
the same values.

HOW: python-dotenv loads the .env file on import. Each default can be
overridden by a TRANSCRIPT_* environment variable.

RULES:
- "-" is the placeholder path for stdin (input) and stdout (output)
- LINE_BREAK_MODES and JSON_TIME_MODES list the only accepted values;
  the CLI passes them to argparse as choices
- Environment overrides are not validated here; the CLI rejects bad values
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Accepted option values
# ---------------------------------------------------------------------------

STDIO_PLACEHOLDER = "-"
"""Path value that selects stdin for input and stdout for output."""

LINE_BREAK_AUTO = "auto"
LINE_BREAK_MANUAL = "manual"
LINE_BREAK_MODES: tuple[str, ...] = (LINE_BREAK_AUTO, LINE_BREAK_MANUAL)

JSON_TIME_ROUND = "round"
JSON_TIME_TRUNCATE = "truncate"
JSON_TIME_MODES: tuple[str, ...] = (JSON_TIME_ROUND, JSON_TIME_TRUNCATE)

SPEAKER_PLACEHOLDER = "{}"
"""Marker in the speaker template that is replaced by the speaker label."""

# ---------------------------------------------------------------------------
# Defaults (overridable via environment)
# ---------------------------------------------------------------------------

DEFAULT_OUTPUT_FORMAT = os.getenv("TRANSCRIPT_FORMAT", "text")
DEFAULT_SPEAKER_FORMAT = os.getenv("TRANSCRIPT_SPEAKER_FORMAT", "{}:")
DEFAULT_LINE_BREAK = os.getenv("TRANSCRIPT_LINE_BREAK", LINE_BREAK_AUTO)
DEFAULT_JSON_TIME = os.getenv("TRANSCRIPT_JSON_TIME", JSON_TIME_ROUND)
LOG_LEVEL = os.getenv("TRANSCRIPT_LOG_LEVEL", "WARNING").upper()
