"""Packaged JSON schemas for input validation and JSON output validation.

HOW: Schemas live next to this module as ``*.schema.json`` files and are
loaded once per process, then served from a module-level cache.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

_SCHEMA_DIR = Path(__file__).resolve().parent

TRANSCRIBE_OUTPUT = "transcribe_output"
TRANSCRIPT_OUTPUT = "transcript_output"

_CACHED_SCHEMAS: dict[str, dict[str, Any]] = {}


def load_schema(name: str) -> dict[str, Any]:
    """Return the parsed schema ``<name>.schema.json``, loading it on first use."""
    if name not in _CACHED_SCHEMAS:
        with open(_SCHEMA_DIR / "{}.schema.json".format(name), encoding="utf-8") as f:
            _CACHED_SCHEMAS[name] = json.load(f)
    return _CACHED_SCHEMAS[name]
