"""Command-line interface for the Transcript Converter.

WHY: Users need a simple way to turn a recognizer's JSON output into a
readable transcript from the terminal or a shell pipeline. The CLI wires
together the full pipeline behind a single command: input reading,
document ingest, line reconstruction, formatting and writing.

HOW: Uses argparse for input/output paths, output format, speaker
template, line-break mode and JSON time mode. The input is read and
reconstructed entirely in memory, rendered to a string, and only then
written. Diagnostics go to stderr through the logging module.

RULES:
- "-" (the default) means stdin for --input and stdout for --output
- Argument errors exit with status 2 before any file is touched
- Any ingest, structure or I/O error prints "Error: <category>: <message>"
  to stderr and exits with status 1
- The output file is created only after rendering succeeds, so a failed
  run never leaves a partial or empty output file
- A successful run logs "Program completed successfully." at INFO
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from transcript_converter import __version__
from transcript_converter.config import (
    DEFAULT_JSON_TIME,
    DEFAULT_LINE_BREAK,
    DEFAULT_OUTPUT_FORMAT,
    DEFAULT_SPEAKER_FORMAT,
    JSON_TIME_MODES,
    LINE_BREAK_MODES,
    LOG_LEVEL,
    SPEAKER_PLACEHOLDER,
    STDIO_PLACEHOLDER,
)
from transcript_converter.core.ingest import ingest_documents, ingest_stream
from transcript_converter.core.ir import IngestedTranscript
from transcript_converter.core.reconstruct import reconstruct
from transcript_converter.errors import (
    InputReadError,
    OutputWriteError,
    TranscriptError,
)
from transcript_converter.formatters import FORMATTERS
from transcript_converter.formatters.base import FormatterOutput, RenderOptions

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    """Send log records to stderr so stdout stays clean for piping."""
    level = logging.INFO if verbose else LOG_LEVEL
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _read_input(path: str) -> IngestedTranscript:
    """Open the input (or stdin for "-") and ingest every document in it.

    Raises:
        InputReadError: If the file cannot be opened or read.
    """
    if path == STDIO_PLACEHOLDER:
        return ingest_stream(sys.stdin.buffer)

    try:
        stream = open(path, "rb")
    except OSError as e:
        raise InputReadError("Error opening the input file: {}".format(e)) from e
    with stream:
        return ingest_stream(stream)


def _write_output(path: str, content: str) -> None:
    """Write the rendered content to the output file (or stdout for "-").

    Raises:
        OutputWriteError: If the file cannot be created or written.
    """
    data = content.encode("utf-8")
    try:
        if path == STDIO_PLACEHOLDER:
            sys.stdout.buffer.write(data)
            sys.stdout.buffer.flush()
        else:
            Path(path).write_bytes(data)
    except OSError as e:
        raise OutputWriteError("Error writing the output: {}".format(e)) from e


def convert(
    text: str,
    output_format: str = DEFAULT_OUTPUT_FORMAT,
    options: Optional[RenderOptions] = None,
) -> FormatterOutput:
    """Run ingest, reconstruction and formatting on already-decoded input.

    WHY: Library callers (and tests) holding the JSON text in memory
    should not have to go through files or stdio.

    Args:
        text: One or more concatenated JSON documents.
        output_format: A key of FORMATTERS.
        options: Render options; defaults from config when None.

    Returns:
        The rendered transcript.

    Raises:
        TranscriptError: On malformed or wrongly shaped input.
        KeyError: If ``output_format`` is not a registered formatter.
    """
    formatter = FORMATTERS[output_format]()
    lines = reconstruct(ingest_documents(text))
    return formatter.format(lines, options or RenderOptions())


def _run_pipeline(args: argparse.Namespace) -> None:
    """Execute read → reconstruct → format → write for parsed arguments."""
    transcript = _read_input(args.input)
    logger.info(
        "Read %d document(s) with %d items",
        transcript.document_count,
        len(transcript.items),
    )

    lines = reconstruct(transcript)
    logger.info("Reconstructed %d line(s)", len(lines))

    formatter = FORMATTERS[args.format]()
    options = RenderOptions(
        speaker_format=args.speaker_format,
        line_break=args.line_break,
        json_time=args.json_time,
    )
    output = formatter.format(lines, options)
    logger.info("Rendered %s output (%s)", formatter.name, output.media_type)

    _write_output(args.output, output.content)


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    WHY: Separating parser construction from main() makes the CLI
    testable: tests can inspect the parser without running the pipeline.
    """
    parser = argparse.ArgumentParser(
        prog="transcript-converter",
        description="Convert speech-recognition JSON output with speaker labels "
                    "into a speaker-attributed transcript (text, HTML or JSON).",
    )

    parser.add_argument(
        "-i", "--input",
        default=STDIO_PLACEHOLDER,
        help="Input JSON file, '-' for standard input (default: %(default)s).",
    )

    parser.add_argument(
        "-o", "--output",
        default=STDIO_PLACEHOLDER,
        help="Output file, '-' for standard output (default: %(default)s).",
    )

    parser.add_argument(
        "-f", "--format",
        default=DEFAULT_OUTPUT_FORMAT,
        choices=sorted(FORMATTERS.keys()),
        help="Output format (default: %(default)s).",
    )

    parser.add_argument(
        "-s", "--speaker-format",
        default=DEFAULT_SPEAKER_FORMAT,
        help="Speaker label template; '{}' is replaced by the speaker label "
             "(default: %(default)s).",
    )

    parser.add_argument(
        "-l", "--line-break",
        default=DEFAULT_LINE_BREAK,
        choices=LINE_BREAK_MODES,
        help="'auto' adds a blank line after each text line, 'manual' does not "
             "(default: %(default)s).",
    )

    parser.add_argument(
        "--json-time",
        default=DEFAULT_JSON_TIME,
        choices=JSON_TIME_MODES,
        help="How JSON output converts times to whole seconds: 'round' matches "
             "earlier releases, 'truncate' matches the text and HTML formats "
             "(default: %(default)s).",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log progress to stderr.",
    )

    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s {}".format(__version__),
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    # Defaults may come from the environment, which argparse does not check
    for flag, value, allowed in (
        ("--format", args.format, FORMATTERS),
        ("--line-break", args.line_break, LINE_BREAK_MODES),
        ("--json-time", args.json_time, JSON_TIME_MODES),
    ):
        if value not in allowed:
            parser.error("invalid {} value {!r}".format(flag, value))

    if not isinstance(logging.getLevelName(LOG_LEVEL), int):
        parser.error("invalid TRANSCRIPT_LOG_LEVEL value {!r}".format(LOG_LEVEL))

    if SPEAKER_PLACEHOLDER not in args.speaker_format:
        parser.error(
            "--speaker-format must contain '{}' (got {!r})".format(
                SPEAKER_PLACEHOLDER, args.speaker_format
            )
        )

    _configure_logging(args.verbose)

    try:
        _run_pipeline(args)
    except KeyboardInterrupt:
        print("\nCancelled by user.", file=sys.stderr)
        sys.exit(130)
    except TranscriptError as e:
        print("Error: {}: {}".format(e.category, e), file=sys.stderr)
        sys.exit(1)

    logger.info("Program completed successfully.")


if __name__ == "__main__":
    main()
