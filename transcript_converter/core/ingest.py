"""Document ingest: concatenated JSON parsing, shape validation, collection.

WHY: The recognizer's output may arrive as a single JSON document or as
several documents written back to back (no array wrapper, no separator
other than optional whitespace). Speaker segments may appear in a later
document than the items they label, so everything has to be collected
before reconstruction starts.

HOW: json.JSONDecoder.raw_decode walks the input one top-level value at a
time. Each document is validated with jsonschema against the packaged
input schema, then its ``results.speaker_labels.segments`` are merged into
the speaker index and its ``results.items`` appended to the item list.

RULES:
- Documents without ``results`` (or non-object documents) contribute nothing
- Item order is preserved within and across documents
- Duplicate start_time in the index: last write wins, never an error
- A segment item missing start_time or speaker_label, or with an empty
  speaker_label, is a StructureError
- Malformed JSON anywhere fails the whole run; no partial result
- Input truncated mid-document is a PrematureEndOfInputError
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, BinaryIO, Iterator, List

import jsonschema
from jsonschema.exceptions import best_match

from transcript_converter.core.ir import (
    SENTINEL_SPEAKER,
    IngestedTranscript,
    TimeSpeakerIndex,
)
from transcript_converter.errors import (
    InputReadError,
    JSONSyntaxError,
    PrematureEndOfInputError,
    StructureError,
)
from transcript_converter.schemas import TRANSCRIBE_OUTPUT, load_schema

logger = logging.getLogger(__name__)

_DECODER = json.JSONDecoder()

# JSON insignificant whitespace (RFC 8259 section 2)
_WHITESPACE_RE = re.compile(r"[ \t\n\r]*")

_LITERALS = ("true", "false", "null")

_NUMBER_CHARS = "0123456789-+.eE"

# A JSON number cut off anywhere after its first character
_NUMBER_PREFIX_RE = re.compile(r"-?(?:[0-9]+(?:\.[0-9]*)?(?:[eE][-+]?[0-9]*)?)?")

_VALIDATOR: jsonschema.Draft7Validator | None = None


def _get_validator() -> jsonschema.Draft7Validator:
    global _VALIDATOR
    if _VALIDATOR is None:
        _VALIDATOR = jsonschema.Draft7Validator(load_schema(TRANSCRIBE_OUTPUT))
    return _VALIDATOR


def _is_cut_token(doc: str, pos: int) -> bool:
    """True when the input ends inside a literal or number at ``pos``.

    The decoder stops at the start of an unrecognized literal (``tru``)
    but inside a number it has partly read (the ``.`` of ``2.``), so the
    number is taken from its first character before ``pos``.
    """
    tail = doc[pos:].rstrip(" \t\n\r")
    if tail and any(len(tail) < len(word) and word.startswith(tail) for word in _LITERALS):
        return True

    start = pos
    while start > 0 and doc[start - 1] in _NUMBER_CHARS:
        start -= 1
    token = doc[start:].rstrip(" \t\n\r")
    return (
        _NUMBER_PREFIX_RE.fullmatch(token) is not None
        and token.endswith(("-", "+", ".", "e", "E"))
    )


def _to_syntax_error(exc: json.JSONDecodeError) -> JSONSyntaxError:
    """Classify a decoder error as premature end of input or a syntax error.

    The decoder reports truncation in three ways: an unterminated string,
    an expectation failing at (or past) the last non-whitespace character,
    or a failure inside a trailing literal or number that was cut short
    (``tru``, ``nul``, ``2.``, ``-``, ``1e``).
    """
    tail = exc.doc[exc.pos:].rstrip(" \t\n\r")
    if (
        exc.msg.startswith("Unterminated string")
        or not tail
        or _is_cut_token(exc.doc, exc.pos)
    ):
        return PrematureEndOfInputError(exc.msg, exc.lineno, exc.colno)
    return JSONSyntaxError(exc.msg, exc.lineno, exc.colno)


def iter_documents(text: str) -> Iterator[Any]:
    """Yield each top-level JSON value in ``text``.

    WHY: ``json.loads`` rejects anything after the first value ("Extra
    data"). Concatenated documents need an incremental decoder.

    HOW: raw_decode parses one value starting at ``pos`` and returns the
    index where it stopped; whitespace between values is skipped.

    Raises:
        JSONSyntaxError: On malformed JSON, with line and column.
        PrematureEndOfInputError: When the input ends inside a document.
    """
    pos = _WHITESPACE_RE.match(text, 0).end()
    end = len(text)
    while pos < end:
        try:
            value, pos = _DECODER.raw_decode(text, pos)
        except json.JSONDecodeError as e:
            raise _to_syntax_error(e) from e
        yield value
        pos = _WHITESPACE_RE.match(text, pos).end()


def validate_document(document: Any, number: int = 1) -> None:
    """Check one document against the input schema.

    Raises:
        StructureError: With the schema message and the JSON path of the
            most relevant violation.
    """
    error = best_match(_get_validator().iter_errors(document))
    if error is not None:
        raise StructureError(error.message, error.json_path).in_document(number)


def build_speaker_index(
    segments: List[Any],
    index: TimeSpeakerIndex | None = None,
) -> TimeSpeakerIndex:
    """Record every ``start_time -> speaker_label`` pair from diarization segments.

    WHY: Items reference speakers only through their start_time string.
    Reconstruction needs an exact-text lookup from that string to a label.

    HOW: Iterates ``segments[*].items[*]`` and writes each pair into
    ``index`` (a new dict when None). Later pairs overwrite earlier ones.

    RULES:
    - Keys are the start_time strings exactly as written in the input
    - Missing start_time or speaker_label is a StructureError, not skipped
    - An empty speaker_label is a StructureError (it would read as "no
      speaker yet" during reconstruction)

    Args:
        segments: The ``results.speaker_labels.segments`` array.
        index: An existing index to extend (shared across documents).

    Returns:
        The extended (or newly created) index.
    """
    if index is None:
        index = {}
    for seg_number, segment in enumerate(segments):
        seg_path = "$.results.speaker_labels.segments[{}]".format(seg_number)
        seg_items = segment.get("items") if isinstance(segment, dict) else None
        if not isinstance(seg_items, list):
            raise StructureError("segment must have an 'items' array", seg_path)
        for item_number, item in enumerate(seg_items):
            item_path = "{}.items[{}]".format(seg_path, item_number)
            if not isinstance(item, dict):
                raise StructureError("segment item must be an object", item_path)
            start_time = item.get("start_time")
            if not isinstance(start_time, str):
                raise StructureError(
                    "start time is missing in the speaker label item", item_path
                )
            speaker_label = item.get("speaker_label")
            if not isinstance(speaker_label, str):
                raise StructureError(
                    "speaker label is missing in the speaker label item", item_path
                )
            if speaker_label == SENTINEL_SPEAKER:
                raise StructureError(
                    "speaker label is empty in the speaker label item", item_path
                )
            index[start_time] = speaker_label
    return index


def ingest_documents(text: str) -> IngestedTranscript:
    """Parse, validate and collect every document in ``text``.

    Args:
        text: Decoded input holding zero or more concatenated JSON documents.

    Returns:
        IngestedTranscript with the merged speaker index and all items.

    Raises:
        JSONSyntaxError, PrematureEndOfInputError: On malformed input.
        StructureError: On a document that violates the input schema.
    """
    transcript = IngestedTranscript()

    for number, document in enumerate(iter_documents(text), start=1):
        validate_document(document, number)
        transcript.document_count = number

        results = document.get("results") if isinstance(document, dict) else None
        if not isinstance(results, dict):
            logger.debug("Document %d has no results, skipping", number)
            continue

        speaker_labels = results.get("speaker_labels")
        if isinstance(speaker_labels, dict) and "segments" in speaker_labels:
            try:
                build_speaker_index(speaker_labels["segments"], transcript.speaker_index)
            except StructureError as e:
                raise e.in_document(number) from e

        if "items" in results:
            transcript.items.extend(results["items"])
            transcript.item_locations.extend(
                (number, position) for position in range(len(results["items"]))
            )

    logger.debug(
        "Ingested %d document(s): %d items, %d speaker timestamps",
        transcript.document_count,
        len(transcript.items),
        len(transcript.speaker_index),
    )
    return transcript


def ingest_stream(stream: BinaryIO) -> IngestedTranscript:
    """Read a binary stream to completion and ingest its documents.

    RULES:
    - The whole stream is read before parsing starts
    - Input is decoded as UTF-8; a leading byte-order mark is ignored

    Raises:
        InputReadError: If reading fails or the bytes are not UTF-8.
    """
    try:
        data = stream.read()
    except OSError as e:
        raise InputReadError("Error reading the input: {}".format(e)) from e

    try:
        text = data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise InputReadError("Input is not valid UTF-8: {}".format(e)) from e

    return ingest_documents(text)
