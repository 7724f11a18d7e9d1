"""Timeline reconstruction: items + speaker index → ordered speaker lines.

WHY: The recognizer attributes speakers only indirectly. Each timed item
carries a start_time string, and the diarization segments map those same
strings to speaker labels. Untimed punctuation belongs to whatever line
is open. Turning that into readable speaker turns is the one real
decision in the pipeline.

HOW: An explicit fold. ``_step`` takes the current ReconstructionState and
one RawItem and returns the next state plus the line it completed, if
any. ``reconstruct_lines`` drives the fold, flushes the last open line
and sorts the result by time.

RULES:
- A timed item's speaker comes from an exact-string index lookup; a miss
  is a StructureError, never a default speaker; so is an empty label,
  which would be indistinguishable from the sentinel
- Speaker change → the open line is completed and a new one starts with
  this item's content and time
- The first accumulator (sentinel speaker) is discarded on a speaker
  change, but the final accumulator is always emitted, even if it still
  has the sentinel speaker
- Same speaker: words are appended with one space, punctuation directly
- Punctuation with no open line is a StructureError
- Output is stable-sorted by time (equal times keep processing order)
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from operator import attrgetter
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from transcript_converter.core.ir import (
    SENTINEL_SPEAKER,
    IngestedTranscript,
    Line,
    RawItem,
    TimeSpeakerIndex,
)
from transcript_converter.errors import StructureError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReconstructionState:
    """State carried from one item to the next.

    Attributes:
        speaker: Candidate speaker, from the most recent timed item.
        time: Candidate line time, from the most recent timed item.
        line: The open accumulator, or None before the first item.
    """

    speaker: str = SENTINEL_SPEAKER
    time: float = 0.0
    line: Optional[Line] = None

    @property
    def open_speaker(self) -> str:
        return self.line.speaker if self.line is not None else SENTINEL_SPEAKER


def _parse_time(start_time: str, location: str) -> float:
    try:
        seconds = float(start_time)
    except ValueError:
        raise StructureError(
            "start_time {!r} is not a number".format(start_time), location
        ) from None
    if not math.isfinite(seconds) or seconds < 0:
        raise StructureError(
            "start_time {!r} is not a finite, non-negative number".format(start_time),
            location,
        )
    return seconds


def _step(
    state: ReconstructionState,
    item: RawItem,
    speaker_index: TimeSpeakerIndex,
    location: str,
) -> Tuple[ReconstructionState, Optional[Line]]:
    """Advance the fold by one item.

    Returns:
        The next state, and the line completed by this item (None when the
        item extended the open line or only the sentinel line was closed).
    """
    speaker = state.speaker
    time = state.time

    if item.start_time is not None:
        try:
            speaker = speaker_index[item.start_time]
        except KeyError:
            raise StructureError(
                "no speaker segment covers start_time {!r}".format(item.start_time),
                location,
            ) from None
        if speaker == SENTINEL_SPEAKER:
            raise StructureError(
                "speaker label for start_time {!r} is empty".format(item.start_time),
                location,
            )
        time = _parse_time(item.start_time, location)

    if speaker != state.open_speaker:
        completed = state.line if state.open_speaker != SENTINEL_SPEAKER else None
        return ReconstructionState(speaker, time, Line(time, speaker, item.content)), completed

    line = state.line
    if line is None:
        if item.is_punctuation:
            raise StructureError(
                "punctuation {!r} has no open line to attach to".format(item.content),
                location,
            )
        line = Line(time, speaker, item.content)
    elif item.is_punctuation:
        line = Line(line.time, line.speaker, line.text + item.content)
    elif line.text:
        line = Line(line.time, line.speaker, line.text + " " + item.content)
    else:
        line = Line(line.time, line.speaker, item.content)

    return ReconstructionState(speaker, time, line), None


def reconstruct_lines(
    items: Iterable[Any],
    speaker_index: TimeSpeakerIndex,
    locations: Optional[Sequence[Tuple[int, int]]] = None,
) -> List[Line]:
    """Fold raw items into speaker lines sorted by time.

    Args:
        items: Raw item dicts (``results.items`` entries) in document order.
        speaker_index: Complete start_time → speaker label mapping.
        locations: (document number, index within that document) for each
            item, used to name the offending item in errors. When None,
            all items are taken to come from document 1.

    Returns:
        Lines sorted by ``time`` ascending; empty when there are no items.

    Raises:
        StructureError: On a malformed item, an unknown start_time, an
            unparsable start_time, an empty speaker label, or punctuation
            with no open line.
    """
    state = ReconstructionState()
    lines: List[Line] = []

    for position, raw in enumerate(items):
        document, index = locations[position] if locations is not None else (1, position)
        path = "$.results.items[{}]".format(index)
        try:
            item = RawItem.from_dict(raw, path)
            state, completed = _step(state, item, speaker_index, path)
        except StructureError as e:
            raise e.in_document(document) from e
        if completed is not None:
            lines.append(completed)

    # Final flush, sentinel speaker included
    if state.line is not None:
        lines.append(state.line)

    lines.sort(key=attrgetter("time"))
    logger.debug("Reconstructed %d line(s)", len(lines))
    return lines


def reconstruct(transcript: IngestedTranscript) -> List[Line]:
    """Reconstruct the lines of an ingested transcript."""
    return reconstruct_lines(
        transcript.items,
        transcript.speaker_index,
        transcript.item_locations or None,
    )
