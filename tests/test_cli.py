"""Tests for the command-line interface.

WHY: The CLI is how build scripts use the normalizer. Wrong exit codes or
output written to the wrong place break those scripts without notice.

HOW: main() is called with explicit argv; files go to pytest's tmp_path.
stdout/stderr are captured with capsys.
"""

import json

import pytest

from bmson_timing.cli import _resolve_output_path, build_parser, main


def _run(argv):
    """Run main() and return its exit code (0 when it returns normally)."""
    try:
        main(argv)
    except SystemExit as e:
        return e.code
    return 0


class TestParser:

    def test_defaults(self):
        args = build_parser().parse_args(["song.bmson"])
        assert args.input_files == ["song.bmson"]
        assert args.formats is None
        assert args.output_dir is None
        assert args.strict is False
        assert args.stdout is False

    def test_multiple_inputs_and_flags(self):
        args = build_parser().parse_args(
            ["a.bmson", "b.bmson", "--strict", "--formats", "timing_json", "--stdout"]
        )
        assert args.input_files == ["a.bmson", "b.bmson"]
        assert args.strict is True
        assert args.formats == "timing_json"
        assert args.stdout is True

    def test_requires_input(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestWritingFiles:

    def test_writes_all_formats_next_to_input(self, write_chart, sample_bmson, tmp_path):
        path = write_chart(sample_bmson, "song.bmson")
        assert _run([str(path)]) == 0
        data = json.loads((tmp_path / "song-timing.json").read_text(encoding="utf-8"))
        assert data[0] == {"y": 0, "bpm": 150, "stop": None}
        assert (tmp_path / "song-timing.txt").exists()

    def test_single_format(self, write_chart, sample_bmson, tmp_path):
        path = write_chart(sample_bmson, "song.bmson")
        assert _run([str(path), "--formats", "timing_table"]) == 0
        assert (tmp_path / "song-timing.txt").exists()
        assert not (tmp_path / "song-timing.json").exists()

    def test_output_dir(self, write_chart, sample_bmson, tmp_path):
        path = write_chart(sample_bmson, "song.bmson")
        out_dir = tmp_path / "out"
        out_dir.mkdir()
        assert _run([str(path), "--output-dir", str(out_dir), "--formats", "timing_json"]) == 0
        assert (out_dir / "song-timing.json").exists()

    def test_conflicting_name_gets_counter(self, write_chart, sample_bmson, tmp_path):
        path = write_chart(sample_bmson, "song.bmson")
        _run([str(path), "--formats", "timing_json"])
        _run([str(path), "--formats", "timing_json"])
        assert (tmp_path / "song-timing.json").exists()
        assert (tmp_path / "song-timing-2.json").exists()

    def test_multiple_charts(self, write_chart, sample_bmson, tmp_path):
        a = write_chart(sample_bmson, "a.bmson")
        b = write_chart({"info": {"init_bpm": 90}}, "b.json")
        assert _run([str(a), str(b), "--formats", "timing_json"]) == 0
        data = json.loads((tmp_path / "b-timing.json").read_text(encoding="utf-8"))
        assert data == [{"y": 0, "bpm": 90, "stop": None}]

    def test_status_goes_to_stderr(self, write_chart, sample_bmson, capsys):
        path = write_chart(sample_bmson, "song.bmson")
        _run([str(path), "--formats", "timing_json"])
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "4 timing directives" in captured.err


class TestStdout:

    def test_prints_first_format(self, write_chart, sample_bmson, capsys, tmp_path):
        path = write_chart(sample_bmson, "song.bmson")
        assert _run([str(path), "--stdout", "--formats", "timing_json,timing_table"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert len(data) == 4
        assert not (tmp_path / "song-timing.json").exists()


class TestErrors:

    def test_missing_file(self, tmp_path, capsys):
        assert _run([str(tmp_path / "missing.bmson")]) == 1
        assert "File not found" in capsys.readouterr().err

    def test_unsupported_extension(self, write_chart, sample_bmson, capsys):
        path = write_chart(sample_bmson, "song.txt")
        assert _run([str(path)]) == 1
        assert "Unsupported file type" in capsys.readouterr().err

    def test_unknown_format(self, write_chart, sample_bmson, capsys):
        path = write_chart(sample_bmson, "song.bmson")
        assert _run([str(path), "--formats", "midi"]) == 1
        assert "Unknown format 'midi'" in capsys.readouterr().err

    def test_missing_output_dir(self, write_chart, sample_bmson, tmp_path, capsys):
        path = write_chart(sample_bmson, "song.bmson")
        assert _run([str(path), "--output-dir", str(tmp_path / "nope")]) == 1
        assert "Output directory does not exist" in capsys.readouterr().err

    def test_invalid_json(self, tmp_path, capsys):
        path = tmp_path / "broken.bmson"
        path.write_text("{", encoding="utf-8")
        assert _run([str(path)]) == 1
        assert "Invalid JSON" in capsys.readouterr().err

    def test_schema_violation(self, write_chart, capsys):
        path = write_chart({"info": {}}, "bad.bmson")
        assert _run([str(path)]) == 1
        assert "Invalid bmson timing data" in capsys.readouterr().err

    def test_strict_violation(self, write_chart, capsys):
        path = write_chart({"info": {"init_bpm": -1}}, "neg.bmson")
        assert _run([str(path), "--strict"]) == 1
        assert "Initial tempo" in capsys.readouterr().err

    def test_lenient_accepts_negative_tempo(self, write_chart):
        path = write_chart({"info": {"init_bpm": -1}}, "neg.bmson")
        assert _run([str(path), "--no-strict", "--formats", "timing_table"]) == 0

    def test_stdout_with_several_inputs(self, write_chart, sample_bmson, capsys):
        a = write_chart(sample_bmson, "a.bmson")
        b = write_chart({"info": {"init_bpm": 90}}, "b.bmson")
        assert _run([str(a), str(b), "--stdout", "--formats", "timing_json"]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "--stdout accepts a single input file" in captured.err

    def test_unknown_log_level(self, write_chart, sample_bmson, monkeypatch, capsys):
        monkeypatch.setattr("bmson_timing.cli.LOG_LEVEL", "LOUD")
        path = write_chart(sample_bmson, "song.bmson")
        assert _run([str(path)]) == 1
        assert "Unknown log level 'LOUD'" in capsys.readouterr().err


class TestResolveOutputPath:

    def test_free_name(self, tmp_path):
        assert _resolve_output_path("song", "-timing.json", tmp_path) == tmp_path / "song-timing.json"

    def test_counter_increments(self, tmp_path):
        (tmp_path / "song-timing.json").write_text("x")
        (tmp_path / "song-timing-2.json").write_text("x")
        assert _resolve_output_path("song", "-timing.json", tmp_path) == tmp_path / "song-timing-3.json"
