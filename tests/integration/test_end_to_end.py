"""CLI and end-to-end integration tests for snakerename."""

import io
import json
import sys
from unittest.mock import patch

import pytest

from snakerename.cli import main

RENAMED_SOURCE = (
    "let item_count = 0;\n"
    "let totalItemCount = item_count;\n"
    "item_count += 1;\n"
)


def run_cli(*args):
    with patch.object(sys, "argv", ["snakerename", *args]):
        main()


@pytest.mark.integration
class TestConvertOnly:
    def test_prints_snake_case(self, workspace, capsys):
        run_cli("someVariableName")

        assert capsys.readouterr().out == "some_variable_name\n"

    def test_acronym(self, workspace, capsys):
        run_cli("HTTPServer")

        assert capsys.readouterr().out == "http_server\n"

    @pytest.mark.parametrize("name", ["123abc", "foo-bar"])
    def test_invalid_identifier_exits_with_notice(self, workspace, capsys, name):
        with pytest.raises(SystemExit) as exc_info:
            run_cli(name)

        assert exc_info.value.code == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "is not a valid identifier" in captured.err


@pytest.mark.integration
class TestRenameFile:
    def test_prints_rewritten_file(self, sample_source, capsys):
        run_cli("itemCount", str(sample_source))

        captured = capsys.readouterr()
        assert captured.out == RENAMED_SOURCE
        assert "Renamed 3 occurrences of 'itemCount' to 'item_count'" in captured.err

    def test_file_untouched_without_in_place(self, sample_source, capsys):
        original = sample_source.read_text()

        run_cli("itemCount", str(sample_source))

        assert sample_source.read_text() == original

    def test_in_place(self, sample_source, capsys):
        run_cli("itemCount", str(sample_source), "-i")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert sample_source.read_text() == RENAMED_SOURCE

    def test_preserves_crlf_line_endings(self, workspace, capsys):
        path = workspace / "crlf.txt"
        path.write_bytes(b"fooBar = 1\r\nprint(fooBar)\r\n")

        run_cli("fooBar", str(path), "--in-place")

        assert path.read_bytes() == b"foo_bar = 1\r\nprint(foo_bar)\r\n"

    def test_explicit_replacement(self, workspace, capsys):
        path = workspace / "worked.js"
        path.write_text("let count = 1; let discount = count + 1;")

        run_cli("count", str(path), "--to", "item_count")

        assert capsys.readouterr().out == "let item_count = 1; let discount = item_count + 1;"

    def test_invalid_explicit_replacement(self, sample_source, capsys):
        with pytest.raises(SystemExit) as exc_info:
            run_cli("itemCount", str(sample_source), "--to", "item-count")

        assert exc_info.value.code == 1
        assert "ERROR: 'item-count' is not a valid identifier" in capsys.readouterr().err

    def test_no_occurrences(self, workspace, capsys):
        path = workspace / "other.js"
        path.write_text("let totalItemCount = 0;\n")

        run_cli("itemCount", str(path), "-i")

        captured = capsys.readouterr()
        assert "No free-standing occurrences of 'itemCount' found." in captured.err
        assert path.read_text() == "let totalItemCount = 0;\n"

    def test_already_snake_case(self, workspace, capsys):
        path = workspace / "snake.py"
        path.write_text("already_snake = 1\n")

        run_cli("already_snake", str(path))

        captured = capsys.readouterr()
        assert captured.out == "already_snake = 1\n"
        assert "already snake_case" in captured.err

    def test_missing_file(self, workspace, capsys):
        with pytest.raises(SystemExit) as exc_info:
            run_cli("itemCount", "does-not-exist.js")

        assert exc_info.value.code == 1
        assert "ERROR: Could not read does-not-exist.js" in capsys.readouterr().err


@pytest.mark.integration
class TestStandardInput:
    def test_reads_from_stdin(self, workspace, capsys):
        with patch.object(sys, "stdin", io.StringIO("x = someName + someName2\n")):
            run_cli("someName", "-")

        assert capsys.readouterr().out == "x = some_name + someName2\n"

    def test_in_place_with_stdin_rejected(self, workspace, capsys):
        with pytest.raises(SystemExit) as exc_info:
            run_cli("someName", "-", "-i")

        assert exc_info.value.code == 2
        assert "--in-place requires a file argument" in capsys.readouterr().err


@pytest.mark.integration
class TestDryRun:
    def test_table(self, sample_source, capsys):
        original = sample_source.read_text()

        run_cli("itemCount", str(sample_source), "--dry-run")

        output = capsys.readouterr().out
        assert "Line" in output
        assert output.count("item_count") == 3
        assert sample_source.read_text() == original

    def test_json(self, sample_source, capsys):
        run_cli("itemCount", str(sample_source), "--dry-run", "--json")

        data = json.loads(capsys.readouterr().out)
        assert data["replacements"] == 3
        assert [edit["line"] for edit in data["edits"]] == [1, 2, 3]
        assert data["edits"][1]["column"] == 22

    def test_json_from_config(self, sample_source, workspace, capsys):
        config_path = workspace / "settings.yaml"
        config_path.write_text("output: json\n")

        run_cli("itemCount", str(sample_source), "--dry-run", "--config", str(config_path))

        assert json.loads(capsys.readouterr().out)["replacements"] == 3

    def test_no_occurrences(self, workspace, capsys):
        path = workspace / "empty.js"
        path.write_text("nothing here\n")

        run_cli("itemCount", str(path), "--dry-run")

        assert capsys.readouterr().out == "No occurrences found.\n"

    def test_already_snake_case_plans_nothing(self, workspace, capsys):
        path = workspace / "snake.py"
        path.write_text("already_snake = already_snake + 1\n")

        run_cli("already_snake", str(path), "--dry-run")

        captured = capsys.readouterr()
        assert captured.out == "No occurrences found.\n"
        assert "already snake_case" in captured.err

    def test_already_snake_case_plans_nothing_as_json(self, workspace, capsys):
        path = workspace / "snake.py"
        path.write_text("already_snake = already_snake + 1\n")

        run_cli("already_snake", str(path), "--dry-run", "--json")

        assert json.loads(capsys.readouterr().out) == {"replacements": 0, "edits": []}

    def test_replacement_equal_to_name_plans_nothing(self, workspace, capsys):
        path = workspace / "camel.js"
        path.write_text("fooBar(fooBar)\n")

        run_cli("fooBar", str(path), "--to", "fooBar", "--dry-run")

        assert capsys.readouterr().out == "No occurrences found.\n"


@pytest.mark.integration
class TestReplacementSameAsName:
    def test_reports_replacement_equals_name(self, workspace, capsys):
        path = workspace / "camel.js"
        path.write_text("fooBar(fooBar)\n")

        run_cli("fooBar", str(path), "--to", "fooBar")

        captured = capsys.readouterr()
        assert captured.out == "fooBar(fooBar)\n"
        assert "Replacement 'fooBar' is the same as the original name" in captured.err
        assert "already snake_case" not in captured.err

    def test_file_untouched_in_place(self, workspace, capsys):
        path = workspace / "camel.js"
        path.write_text("fooBar(fooBar)\n")

        run_cli("fooBar", str(path), "--to", "fooBar", "-i")

        assert path.read_text() == "fooBar(fooBar)\n"


@pytest.mark.integration
class TestConfiguration:
    def test_local_config_enables_in_place(self, sample_source, workspace, capsys):
        (workspace / ".snakerename.yaml").write_text("in_place: true\n")

        run_cli("itemCount", str(sample_source))

        assert capsys.readouterr().out == ""
        assert sample_source.read_text() == RENAMED_SOURCE

    def test_config_in_place_ignored_for_stdin(self, workspace, capsys):
        (workspace / ".snakerename.yaml").write_text("in_place: true\n")

        with patch.object(sys, "stdin", io.StringIO("fooBar\n")):
            run_cli("fooBar", "-")

        assert capsys.readouterr().out == "foo_bar\n"

    def test_invalid_config(self, sample_source, workspace, capsys):
        config_path = workspace / "bad.yaml"
        config_path.write_text("output: xml\n")

        with pytest.raises(SystemExit) as exc_info:
            run_cli("itemCount", str(sample_source), "--config", str(config_path))

        assert exc_info.value.code == 1
        assert "ERROR: Invalid output format 'xml'" in capsys.readouterr().err

    def test_debug_flag(self, sample_source, capsys):
        run_cli("itemCount", str(sample_source), "--debug")

        err = capsys.readouterr().err
        assert "[DEBUG]" in err
        assert "Accepted 'itemCount' at [4, 13)" in err
