"""Tests for the command-line interface.

WHY: The CLI is where files, stdio, exit codes and error categories meet.
A failed run must exit non-zero with a categorized message and must not
leave an output file behind.

HOW: main() is called with explicit argv. Files live in tmp_path; stdin
is replaced through monkeypatch; stdout and stderr are read with capsys.
"""

import io
import json
import logging
import sys

import pytest

from transcript_converter.cli import build_parser, convert, main
from transcript_converter.formatters.base import RenderOptions


def _run(argv):
    """Run main() and return its exit code (0 when it returns normally)."""
    try:
        main(argv)
    except SystemExit as e:
        return e.code
    return 0


class TestParser:
    """Defaults and choices exposed by build_parser()."""

    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.input == "-"
        assert args.output == "-"
        assert args.format == "text"
        assert args.speaker_format == "{}:"
        assert args.line_break == "auto"
        assert args.json_time == "round"

    def test_short_flags(self):
        args = build_parser().parse_args(
            ["-i", "in.json", "-o", "out.html", "-f", "html", "-s", "[{}]", "-l", "manual"]
        )
        assert (args.input, args.output, args.format) == ("in.json", "out.html", "html")
        assert (args.speaker_format, args.line_break) == ("[{}]", "manual")


class TestConvert:
    """In-memory conversion helper."""

    def test_text_conversion(self, sample_json):
        output = convert(sample_json, "text", RenderOptions(line_break="manual"))
        assert output.content == (
            "[00:00:00] spk_0: Hello there.\n"
            "[00:00:02] spk_1: Hi! Welcome back.\n"
        )


class TestFileIO:
    """Input and output files, and stdio via "-"."""

    def test_file_to_file(self, tmp_path, sample_json):
        source = tmp_path / "job.json"
        target = tmp_path / "job.txt"
        source.write_text(sample_json, encoding="utf-8")

        assert _run(["-i", str(source), "-o", str(target)]) == 0
        assert target.read_text(encoding="utf-8") == (
            "[00:00:00] spk_0: Hello there.\n\n"
            "[00:00:02] spk_1: Hi! Welcome back.\n\n"
        )

    def test_stdin_to_stdout(self, monkeypatch, capsys, split_json):
        monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(split_json.encode("utf-8"))))

        assert _run(["-f", "json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert [entry["speaker"] for entry in data["transcription"]] == ["spk_0", "spk_1"]

    def test_html_output(self, tmp_path, sample_json):
        source = tmp_path / "job.json"
        target = tmp_path / "job.html"
        source.write_text(sample_json, encoding="utf-8")

        assert _run(["-i", str(source), "-o", str(target), "-f", "html", "-s", "Speaker {}"]) == 0
        assert '<span class="speaker">Speaker spk_1</span>' in target.read_text(encoding="utf-8")

    def test_completion_is_logged(self, tmp_path, caplog, sample_json):
        source = tmp_path / "job.json"
        source.write_text(sample_json, encoding="utf-8")
        caplog.set_level(logging.INFO, logger="transcript_converter")

        assert _run(["-i", str(source), "-o", str(tmp_path / "out.txt"), "-v"]) == 0
        assert "Program completed successfully." in caplog.text


class TestErrors:
    """Failures exit non-zero with a categorized message on stderr."""

    def test_missing_input_file(self, tmp_path, capsys):
        code = _run(["-i", str(tmp_path / "missing.json")])
        assert code == 1
        assert capsys.readouterr().err.startswith("Error: I/O error: Error opening the input file")

    def test_syntax_error(self, tmp_path, capsys):
        source = tmp_path / "bad.json"
        source.write_text('{"results": oops}', encoding="utf-8")

        assert _run(["-i", str(source)]) == 1
        err = capsys.readouterr().err
        assert err.startswith("Error: JSON syntax error:")
        assert "line 1, column 13" in err

    def test_premature_end(self, tmp_path, capsys):
        source = tmp_path / "cut.json"
        source.write_text('{"results": {"items": [', encoding="utf-8")

        assert _run(["-i", str(source)]) == 1
        assert capsys.readouterr().err.startswith("Error: unexpected end of input:")

    def test_structure_error_writes_no_output(self, tmp_path, capsys, document_factory):
        doc = document_factory(
            items=[{"type": "pronunciation", "start_time": "1.0", "alternatives": [{"content": "Hi"}]}],
            segments=[{"items": [{"start_time": "1.0"}]}],
        )
        source = tmp_path / "job.json"
        target = tmp_path / "job.txt"
        source.write_text(json.dumps(doc), encoding="utf-8")

        assert _run(["-i", str(source), "-o", str(target)]) == 1
        assert capsys.readouterr().err.startswith("Error: invalid transcript structure:")
        assert not target.exists()

    def test_unwritable_output(self, tmp_path, capsys, sample_json):
        source = tmp_path / "job.json"
        source.write_text(sample_json, encoding="utf-8")

        assert _run(["-i", str(source), "-o", str(tmp_path / "no-such-dir" / "out.txt")]) == 1
        assert capsys.readouterr().err.startswith("Error: I/O error: Error writing the output")


class TestArgumentErrors:
    """Invalid arguments are rejected by argparse before any I/O."""

    def test_speaker_format_without_placeholder(self, tmp_path, capsys):
        target = tmp_path / "out.txt"
        assert _run(["-i", str(tmp_path / "missing.json"), "-o", str(target), "-s", "Speaker:"]) == 2
        assert "must contain '{}'" in capsys.readouterr().err
        assert not target.exists()

    def test_unknown_format(self, capsys):
        assert _run(["-f", "pdf"]) == 2
        assert "invalid choice" in capsys.readouterr().err

    def test_unknown_line_break(self, capsys):
        assert _run(["-l", "sometimes"]) == 2

    def test_invalid_log_level_from_environment(self, tmp_path, capsys, monkeypatch):
        monkeypatch.setattr("transcript_converter.cli.LOG_LEVEL", "FOO")
        target = tmp_path / "out.txt"

        assert _run(["-i", str(tmp_path / "missing.json"), "-o", str(target)]) == 2
        assert "invalid TRANSCRIPT_LOG_LEVEL value 'FOO'" in capsys.readouterr().err
        assert not target.exists()
