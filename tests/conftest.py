"""Shared test fixtures for the transcript_converter test suite.

WHY: Ingest, reconstruction, formatter and CLI tests all need the same
small two-speaker conversation. Centralizing it here keeps every module
checking the same expected lines.

HOW: Pytest fixtures provide the raw recognizer document (as a dict and
as JSON text), its items and segments split across two documents, and
the Line list it reconstructs to.

RULES:
- Speaker spk_0 says "Hello there." starting at 0.5 s
- Speaker spk_1 says "Hi! Welcome back." starting at 2.25 s
- Punctuation items carry no start_time, as the recognizer emits them
"""

import json
from typing import Any, Dict, List

import pytest

from transcript_converter.core.ir import Line


# ---------------------------------------------------------------------------
# Sample conversation
# ---------------------------------------------------------------------------

SAMPLE_ITEMS: List[Dict[str, Any]] = [
    {"type": "pronunciation", "start_time": "0.5",  "end_time": "0.9",  "alternatives": [{"confidence": "0.99", "content": "Hello"}]},
    {"type": "pronunciation", "start_time": "1.0",  "end_time": "1.4",  "alternatives": [{"confidence": "0.98", "content": "there"}]},
    {"type": "punctuation",                                              "alternatives": [{"confidence": "0.0",  "content": "."}]},
    {"type": "pronunciation", "start_time": "2.25", "end_time": "2.5",  "alternatives": [{"confidence": "0.97", "content": "Hi"}]},
    {"type": "punctuation",                                              "alternatives": [{"confidence": "0.0",  "content": "!"}]},
    {"type": "pronunciation", "start_time": "3.0",  "end_time": "3.6",  "alternatives": [{"confidence": "0.95", "content": "Welcome"}]},
    {"type": "pronunciation", "start_time": "3.7",  "end_time": "4.1",  "alternatives": [{"confidence": "0.96", "content": "back"}]},
    {"type": "punctuation",                                              "alternatives": [{"confidence": "0.0",  "content": "."}]},
]

SAMPLE_SEGMENTS: List[Dict[str, Any]] = [
    {
        "start_time": "0.5",
        "end_time": "1.4",
        "speaker_label": "spk_0",
        "items": [
            {"start_time": "0.5", "end_time": "0.9", "speaker_label": "spk_0"},
            {"start_time": "1.0", "end_time": "1.4", "speaker_label": "spk_0"},
        ],
    },
    {
        "start_time": "2.25",
        "end_time": "4.1",
        "speaker_label": "spk_1",
        "items": [
            {"start_time": "2.25", "end_time": "2.5", "speaker_label": "spk_1"},
            {"start_time": "3.0",  "end_time": "3.6", "speaker_label": "spk_1"},
            {"start_time": "3.7",  "end_time": "4.1", "speaker_label": "spk_1"},
        ],
    },
]

SAMPLE_LINES: List[Line] = [
    Line(time=0.5, speaker="spk_0", text="Hello there."),
    Line(time=2.25, speaker="spk_1", text="Hi! Welcome back."),
]


def make_document(items=None, segments=None) -> Dict[str, Any]:
    """Wrap items and/or segments in the recognizer's document shape."""
    results: Dict[str, Any] = {}
    if items is not None:
        results["items"] = items
    if segments is not None:
        results["speaker_labels"] = {"speakers": len(segments), "segments": segments}
    return {"jobName": "test-job", "status": "COMPLETED", "results": results}


@pytest.fixture
def sample_document():
    """Single document holding both items and speaker segments."""
    return make_document(items=list(SAMPLE_ITEMS), segments=list(SAMPLE_SEGMENTS))


@pytest.fixture
def sample_json(sample_document):
    """The sample document serialized as pretty-printed JSON text."""
    return json.dumps(sample_document, indent=2)


@pytest.fixture
def split_json():
    """Items and segments in two concatenated documents, segments last."""
    return (
        json.dumps(make_document(items=list(SAMPLE_ITEMS)))
        + "\n"
        + json.dumps(make_document(segments=list(SAMPLE_SEGMENTS)))
    )


@pytest.fixture
def sample_lines():
    """The Line list the sample conversation reconstructs to."""
    return list(SAMPLE_LINES)


@pytest.fixture
def document_factory():
    """The make_document helper, for tests that build their own documents."""
    return make_document
