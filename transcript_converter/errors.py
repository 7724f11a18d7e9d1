"""Exception hierarchy for the converter.

WHY: The CLI must report syntax errors, premature end of input, I/O
failures and wrongly shaped data as separate diagnostic categories.
A small hierarchy lets the core raise precise errors while the CLI
catches a single base class.

RULES:
- Every error is fatal; nothing in the package retries or recovers
- ``category`` is the human-readable label printed by the CLI
- Position-carrying errors use 1-based line and column numbers
"""

from __future__ import annotations


class TranscriptError(Exception):
    """Base class for every error raised by the converter."""

    category = "error"


class InputReadError(TranscriptError):
    """The input stream could not be opened, read or decoded."""

    category = "I/O error"


class OutputWriteError(TranscriptError):
    """The output sink could not be opened or written."""

    category = "I/O error"


class JSONSyntaxError(TranscriptError):
    """The input is not well-formed JSON.

    Attributes:
        line: 1-based line of the offending character, or None.
        column: 1-based column of the offending character, or None.
    """

    category = "JSON syntax error"

    def __init__(self, message: str, line: int | None = None, column: int | None = None):
        self.line = line
        self.column = column
        if line is not None and column is not None:
            message = "{} (line {}, column {})".format(message, line, column)
        super().__init__(message)


class PrematureEndOfInputError(JSONSyntaxError):
    """The input ended in the middle of a JSON document."""

    category = "unexpected end of input"


class StructureError(TranscriptError):
    """Well-formed JSON whose shape does not match the transcript format.

    Attributes:
        reason: The message without the path suffix.
        path: JSON path of the offending value within its document (e.g.
              ``$.results.items[3]``), or None when the violation is not
              tied to one location.
    """

    category = "invalid transcript structure"

    def __init__(self, message: str, path: str | None = None):
        self.reason = message
        self.path = path
        if path:
            message = "{} at {}".format(message, path)
        super().__init__(message)

    def in_document(self, number: int) -> StructureError:
        """Return the same error prefixed with its 1-based document number."""
        return StructureError("document {}: {}".format(number, self.reason), self.path)
