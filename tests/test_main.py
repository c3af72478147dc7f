"""
Tests for the command line interface.
"""

import json

import pytest
from click.testing import CliRunner

from sheet_music_transposer import __version__
from sheet_music_transposer.main import main


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def sample_file(tmp_path, sample_xml):
    path = tmp_path / "hymn.musicxml"
    path.write_text(sample_xml, encoding="utf-8")
    return path


class TestInfoCommand:
    """Tests for the info command."""

    def test_info(self, runner, sample_file):
        """Test metadata is printed."""
        result = runner.invoke(main, ["info", str(sample_file)])

        assert result.exit_code == 0
        assert "찬송가 예제" in result.output
        assert "작곡가" in result.output
        assert "C major" in result.output
        assert "4/4" in result.output
        assert "Part P1 (Voice): 4 measures, 13 notes" in result.output

    def test_missing_file(self, runner, tmp_path):
        """Test a missing file is a usage error."""
        result = runner.invoke(main, ["info", str(tmp_path / "missing.musicxml")])
        assert result.exit_code == 2

    def test_malformed_file(self, runner, tmp_path):
        """Test a broken document is reported, not raised."""
        path = tmp_path / "broken.musicxml"
        path.write_text("<score-partwise>", encoding="utf-8")

        result = runner.invoke(main, ["info", str(path)])
        assert result.exit_code == 1
        assert "Error:" in result.output


class TestSolfegeCommand:
    """Tests for the solfege command."""

    def test_fixed(self, runner, sample_file):
        result = runner.invoke(main, ["solfege", str(sample_file)])

        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert len(lines) == 13
        assert lines[0].split() == ["1", "0", "C4", "도"]

    def test_movable(self, runner, sample_file):
        """Test movable do relative to a given key."""
        result = runner.invoke(main, ["solfege", str(sample_file), "--movable", "--key", "G"])

        assert result.exit_code == 0
        assert result.output.splitlines()[0].split()[-1] == "파"

    def test_output_json(self, runner, sample_file, tmp_path):
        output = tmp_path / "solfege.json"
        result = runner.invoke(main, ["solfege", str(sample_file), "-o", str(output)])

        assert result.exit_code == 0
        records = json.loads(output.read_text(encoding="utf-8"))
        assert [r["syllable"] for r in records[:4]] == ["도", "미", "솔", "도"]

    def test_output_uses_export_config(self, runner, sample_file, tmp_path, isolated_config):
        """Test the configured JSON indent and encoding are applied."""
        isolated_config.export.json_indent = 4
        isolated_config.export.encoding = "utf-16"
        output = tmp_path / "solfege.json"

        result = runner.invoke(main, ["solfege", str(sample_file), "-o", str(output)])

        assert result.exit_code == 0
        text = output.read_text(encoding="utf-16")
        assert text.startswith('[\n    {\n        "part_id"')
        assert json.loads(text)[0]["syllable"] == "도"


class TestTransposeCommand:
    """Tests for the transpose command."""

    def test_transpose_to_file(self, runner, sample_file, tmp_path):
        """Test the key is detected and the result written."""
        output = tmp_path / "hymn_d.musicxml"
        result = runner.invoke(main, ["transpose", str(sample_file), "--to", "D", "-o", str(output)])

        assert result.exit_code == 0
        text = output.read_text(encoding="utf-8")
        assert "<fifths>2</fifths>" in text
        assert "<step>F</step>" in text

    def test_transpose_to_stdout(self, runner, sample_file):
        result = runner.invoke(main, ["transpose", str(sample_file), "--from", "C", "--to", "Bb"])

        assert result.exit_code == 0
        assert result.output.startswith("<?xml")
        assert "<fifths>-2</fifths>" in result.output

    def test_invalid_key(self, runner, sample_file):
        """Test an unreadable key name fails cleanly."""
        result = runner.invoke(main, ["transpose", str(sample_file), "--to", "H"])

        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_to_required(self, runner, sample_file):
        result = runner.invoke(main, ["transpose", str(sample_file)])
        assert result.exit_code == 2


class TestGroup:
    """Tests for group-level options."""

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_lists_commands(self, runner):
        result = runner.invoke(main, ["--help"])
        for command in ("info", "solfege", "transpose"):
            assert command in result.output
