"""Intermediate representation dataclasses for reconstructed transcripts.

WHY: The ASR output is a flat list of word/punctuation items plus a
separate list of diarization segments. Formatters need neither of those;
they need ordered speaker turns. The IR gives ingest, reconstruction and
formatting a small, well-typed contract to share.

HOW: Four types:
  RawItem             one ASR token parsed from the item JSON
  IngestedTranscript  everything collected from the input documents
  Line                one reconstructed speaker turn
  TimeSpeakerIndex    start_time string → speaker label

RULES:
- Timestamps in the index are the exact strings from the input ("1.0"
  and "1.00" are different keys)
- Line.time is float seconds of the first token attributed to the line
- Line.speaker is SENTINEL_SPEAKER until the first timed item is seen
- Line objects are frozen once reconstruction emits them
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

from transcript_converter.errors import StructureError

TimeSpeakerIndex = Dict[str, str]

SENTINEL_SPEAKER = ""
"""Speaker label of the accumulator before any timed item is processed.

Never a valid diarization label: empty labels are rejected on ingest.
"""

ITEM_TYPE_PRONUNCIATION = "pronunciation"
ITEM_TYPE_PUNCTUATION = "punctuation"


@dataclass
class RawItem:
    """A single word or punctuation token from ``results.items``.

    WHY: The raw item dict nests its text under ``alternatives[0].content``
    and only some items carry a ``start_time``. Reconstruction needs those
    three facts and nothing else.

    RULES:
    - item_type: "pronunciation" or "punctuation" (other values are kept
      as-is and treated like words)
    - content: text of the first alternative, required
    - start_time: the original timestamp string, or None when absent
    """

    item_type: str
    content: str
    start_time: str | None = None

    @property
    def is_punctuation(self) -> bool:
        return self.item_type == ITEM_TYPE_PUNCTUATION

    @classmethod
    def from_dict(cls, data: Any, path: str = "$") -> RawItem:
        """Parse a RawItem from a raw item dict.

        Raises:
            StructureError: If the item is not an object, the alternatives
                list is missing or empty, the first alternative has no string
                ``content``, or ``type``/``start_time`` are not strings.
        """
        if not isinstance(data, dict):
            raise StructureError("transcription item must be an object", path)

        item_type = data.get("type", ITEM_TYPE_PRONUNCIATION)
        if not isinstance(item_type, str):
            raise StructureError("item 'type' must be a string", path + ".type")

        alternatives = data.get("alternatives")
        if not isinstance(alternatives, list) or not alternatives:
            raise StructureError(
                "item must have a non-empty 'alternatives' array", path + ".alternatives"
            )
        first = alternatives[0]
        content = first.get("content") if isinstance(first, dict) else None
        if not isinstance(content, str):
            raise StructureError(
                "first alternative has no string 'content'",
                path + ".alternatives[0].content",
            )

        start_time = data.get("start_time")
        if start_time is not None and not isinstance(start_time, str):
            raise StructureError("item 'start_time' must be a string", path + ".start_time")

        return cls(item_type=item_type, content=content, start_time=start_time)


@dataclass
class IngestedTranscript:
    """Everything collected from the input documents, before reconstruction.

    RULES:
    - speaker_index: merged across all documents, last write wins
    - items: raw item dicts in document order, then input order
    - document_count: number of top-level JSON values read
    - item_locations: (document number, index in that document's
      ``results.items``) for each entry of items, used in error paths
    """

    speaker_index: TimeSpeakerIndex = field(default_factory=dict)
    items: list[dict[str, Any]] = field(default_factory=list)
    document_count: int = 0
    item_locations: list[tuple[int, int]] = field(default_factory=list)


@dataclass(frozen=True)
class Line:
    """One reconstructed speaker turn.

    WHY: Formatters render one output line per speaker turn. The time,
    the speaker label and the joined text are all they need.

    RULES:
    - time: float seconds of the first token in the turn
    - speaker: diarization label, or SENTINEL_SPEAKER
    - text: words separated by one space, punctuation attached directly
    """

    time: float
    speaker: str
    text: str
