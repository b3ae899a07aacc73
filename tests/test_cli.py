"""Tests for the allergyscan CLI."""

import csv
import io
import json

import pytest
from typer.testing import CliRunner

from allergyscan.cli.commands.scan import transform_result_for_json
from allergyscan.cli.main import app
from allergyscan.core.analysis import analyze

runner = CliRunner()


@pytest.fixture
def label_file(tmp_path):
    path = tmp_path / "label.txt"
    path.write_text("Ingredients: wheat flour,\r\nbarley malt extract, salt\n", encoding="utf-8")
    return path


class TestTermsCommands:
    """Tests for the terms sub-commands."""

    def test_list_defaults(self, tmp_path):
        result = runner.invoke(app, ["terms", "list", "--data-dir", str(tmp_path)])

        assert result.exit_code == 0
        assert "malted barley" in result.output
        assert "Total terms: 4" in result.output

    def test_add_then_remove(self, tmp_path):
        added = runner.invoke(app, ["terms", "add", "  soy ", "--data-dir", str(tmp_path)])
        listed = runner.invoke(app, ["terms", "list", "--data-dir", str(tmp_path)])
        removed = runner.invoke(app, ["terms", "remove", "SOY", "--data-dir", str(tmp_path)])

        assert added.exit_code == 0
        assert "Added: soy" in added.output
        assert "soy" in listed.output
        assert removed.exit_code == 0
        assert "Removed: SOY" in removed.output

    def test_add_blank_fails(self, tmp_path):
        result = runner.invoke(app, ["terms", "add", "   ", "--data-dir", str(tmp_path)])

        assert result.exit_code == 1
        assert "must not be blank" in result.output

    def test_remove_unknown_fails(self, tmp_path):
        result = runner.invoke(app, ["terms", "remove", "kiwi", "--data-dir", str(tmp_path)])

        assert result.exit_code == 1
        assert "Term not found" in result.output

    def test_reset(self, tmp_path):
        runner.invoke(app, ["terms", "add", "soy", "--data-dir", str(tmp_path)])

        result = runner.invoke(app, ["terms", "reset", "--yes", "--data-dir", str(tmp_path)])

        assert result.exit_code == 0
        assert "Total terms: 4" in result.output

    def test_list_empty(self, tmp_path):
        for term in ["barley", "barley flour", "malted barley", "beer"]:
            runner.invoke(app, ["terms", "remove", term, "--data-dir", str(tmp_path)])

        result = runner.invoke(app, ["terms", "list", "--data-dir", str(tmp_path)])

        assert result.exit_code == 0
        assert "No terms saved" in result.output


class TestCheckCommand:
    """Tests for checking a text file."""

    def test_json_output(self, tmp_path, label_file):
        result = runner.invoke(
            app,
            ["check", str(label_file), "-f", "json", "-t", "barley", "-t", "malt", "--data-dir", str(tmp_path)],
        )

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["match_count"] == 2
        assert data["matched_terms"] == {"barley": 1, "malt": 1}
        assert data["line_count"] == 3
        assert [m["line"] for m in data["matches"]] == [1, 1]
        assert "\r" not in data["document"]

    def test_saved_terms_used_without_overrides(self, tmp_path, label_file):
        result = runner.invoke(app, ["check", str(label_file), "-f", "json", "--data-dir", str(tmp_path)])

        data = json.loads(result.stdout)
        assert data["matched_terms"] == {"barley": 1}
        assert sorted(data["missing_terms"]) == ["barley flour", "beer", "malted barley"]

    def test_csv_output(self, tmp_path, label_file):
        result = runner.invoke(
            app, ["check", str(label_file), "-f", "csv", "-t", "malt", "--data-dir", str(tmp_path)]
        )

        assert result.exit_code == 0
        rows = list(csv.DictReader(io.StringIO(result.stdout)))
        assert rows == [{"term": "malt", "text": "malt", "start": "33", "end": "37", "line": "1"}]

    def test_output_file(self, tmp_path, label_file):
        output = tmp_path / "out" / "report.json"

        result = runner.invoke(
            app,
            ["check", str(label_file), "-f", "json", "-t", "salt", "-o", str(output), "--data-dir", str(tmp_path)],
        )

        assert result.exit_code == 0
        assert json.loads(output.read_text(encoding="utf-8"))["match_count"] == 1

    def test_table_output(self, tmp_path, label_file):
        result = runner.invoke(app, ["check", str(label_file), "-t", "barley", "--data-dir", str(tmp_path)])

        assert result.exit_code == 0
        assert "barley malt extract" in result.output
        assert "1 matches" in result.output

    def test_table_output_without_matches(self, tmp_path, label_file):
        result = runner.invoke(app, ["check", str(label_file), "-t", "peanut", "--data-dir", str(tmp_path)])

        assert result.exit_code == 0
        assert "None of the 1 terms were found" in result.output

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["check", str(tmp_path / "nope.txt"), "--data-dir", str(tmp_path)])

        assert result.exit_code != 0


class TestScanCommand:
    """Tests for the scan command's error paths."""

    def test_unknown_backend(self, tmp_path):
        image = tmp_path / "label.jpg"
        image.write_bytes(b"not really a jpeg")

        result = runner.invoke(app, ["scan", str(image), "-b", "tesseract", "--data-dir", str(tmp_path)])

        assert result.exit_code == 1
        assert "tesseract" in result.output


class TestTransformResultForJson:
    """Tests for transform_result_for_json."""

    def test_fields(self):
        data = transform_result_for_json(analyze("beer\nmalt", {"beer", "soy"}))

        assert data["terms"] == ["beer", "soy"]
        assert data["missing_terms"] == ["soy"]
        assert data["matches"] == [{"term": "beer", "text": "beer", "start": 0, "end": 4, "line": 0}]
        assert data["document"] == "beer\nmalt"
