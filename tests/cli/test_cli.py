"""Tests for the global-filters command line."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from global_filters.cli.main import app
from global_filters.core.config import get_settings
from global_filters.core.models.base import CommandResult
from global_filters.document.cells import InMemoryDocument
from global_filters.filters.persistence import read_document

runner = CliRunner()


class TestList:
    """Tests for the list command."""

    def test_table(self, dashboard_file: Path):
        result = runner.invoke(app, ["list", str(dashboard_file)])

        assert result.exit_code == 0
        assert "Period" in result.output
        assert "Partner" in result.output
        assert "res.partner" in result.output

    def test_json(self, dashboard_file: Path):
        result = runner.invoke(app, ["list", str(dashboard_file), "--json"])

        assert result.exit_code == 0
        listed = json.loads(result.stdout)
        assert [f["id"] for f in listed] == ["f1", "f2"]
        assert listed[0]["rangeType"] == "relative"

    def test_empty_document(self, write_document):
        path = write_document({"sheets": []})

        result = runner.invoke(app, ["list", str(path)])

        assert result.exit_code == 0
        assert "No global filters" in result.output

    def test_invalid_document_exits(self, write_document):
        path = write_document({"globalFilters": [{"id": "f1", "label": "A", "type": "number"}]})

        result = runner.invoke(app, ["list", str(path)])

        assert result.exit_code == 1
        assert "Invalid global filter" in result.output


class TestCheck:
    """Tests for the check command."""

    def test_valid_document(self, dashboard_file: Path):
        result = runner.invoke(app, ["check", str(dashboard_file)])

        assert result.exit_code == 0
        assert "OK" in result.output
        assert "2 global filter(s)" in result.output

    def test_refused_filters(self, write_document):
        path = write_document(
            {
                "globalFilters": [
                    {"id": "f1", "label": "Year", "type": "text"},
                    {"id": "f2", "label": "Year", "type": "text"},
                ]
            }
        )

        result = runner.invoke(app, ["check", str(path)])

        assert result.exit_code == 1
        assert "1 filter(s) refused" in result.output
        assert "f2 (Year): duplicated_filter_label" in result.output

    def test_unreadable_document(self, tmp_path: Path):
        path = tmp_path / "broken.json"
        path.write_text("{", encoding="utf-8")

        result = runner.invoke(app, ["check", str(path)])

        assert result.exit_code == 1
        assert "Invalid JSON" in result.output


class TestRename:
    """Tests for the rename command."""

    def test_rename_in_place(self, dashboard_file: Path):
        result = runner.invoke(app, ["rename", str(dashboard_file), "Period", "Fiscal period"])

        assert result.exit_code == 0
        assert "Renamed 'Period' to 'Fiscal period'" in result.output
        assert "sheet1!A1" in result.output
        assert "sheet1!A2" in result.output

        saved = read_document(dashboard_file)
        cells = saved["sheets"][0]["cells"]
        assert cells["A1"] == '=FILTER.VALUE("Fiscal period")'
        assert cells["A2"] == '=FILTER.VALUE("Fiscal period")&" / "&FILTER.VALUE("Partner")'
        assert cells["B1"] == "Period"
        assert saved["globalFilters"][0]["label"] == "Fiscal period"

    def test_rename_to_output_file(self, tmp_path: Path, dashboard_file: Path):
        output = tmp_path / "renamed.yaml"
        original = dashboard_file.read_text(encoding="utf-8")

        result = runner.invoke(
            app, ["rename", str(dashboard_file), "Partner", "Customer", "-o", str(output)]
        )

        assert result.exit_code == 0
        assert dashboard_file.read_text(encoding="utf-8") == original
        saved = read_document(output)
        assert [f["label"] for f in saved["globalFilters"]] == ["Period", "Customer"]

    def test_unknown_label(self, dashboard_file: Path):
        result = runner.invoke(app, ["rename", str(dashboard_file), "Nope", "Other"])

        assert result.exit_code == 1
        assert "No global filter labelled 'Nope'" in result.output

    def test_duplicated_label_is_refused(self, dashboard_file: Path):
        original = dashboard_file.read_text(encoding="utf-8")

        result = runner.invoke(app, ["rename", str(dashboard_file), "Period", "Partner"])

        assert result.exit_code == 1
        assert "duplicated_filter_label" in result.output
        assert dashboard_file.read_text(encoding="utf-8") == original

    def test_refused_cells_exit_with_partial_status(self, monkeypatch, dashboard_file: Path):
        monkeypatch.setattr(
            InMemoryDocument, "dispatch", lambda self, command: CommandResult.INVALID_SHEET_ID
        )

        result = runner.invoke(app, ["rename", str(dashboard_file), "Period", "Fiscal period"])

        assert result.exit_code == 2
        assert "refused" in result.output
        assert "invalid_sheet_id" in result.output
        saved = read_document(dashboard_file)
        assert saved["globalFilters"][0]["label"] == "Fiscal period"
        assert saved["sheets"][0]["cells"]["A1"] == '=FILTER.VALUE("Period")'


class TestLoggingSettings:
    """Tests for logging configured from GLOBAL_FILTERS_* settings."""

    @pytest.fixture
    def logging_calls(self, monkeypatch):
        calls = []
        monkeypatch.setattr(
            "global_filters.cli.common.configure_logging", lambda **kwargs: calls.append(kwargs)
        )
        get_settings.cache_clear()
        yield calls
        get_settings.cache_clear()

    def test_json_log_format_from_environment(self, monkeypatch, logging_calls, dashboard_file):
        monkeypatch.setenv("GLOBAL_FILTERS_LOG_FORMAT", "json")

        result = runner.invoke(app, ["list", str(dashboard_file)])

        assert result.exit_code == 0
        assert logging_calls[0]["log_format"] == "json"
        assert logging_calls[0]["color"] is False
        assert logging_calls[0]["log_level"] == "WARNING"

    def test_log_level_from_environment(self, monkeypatch, logging_calls, dashboard_file):
        monkeypatch.setenv("GLOBAL_FILTERS_LOG_LEVEL", "ERROR")

        runner.invoke(app, ["check", str(dashboard_file)])

        assert logging_calls[0]["log_level"] == "ERROR"
        assert logging_calls[0]["log_format"] == "console"

    def test_verbose_flag_overrides_log_level(self, monkeypatch, logging_calls, dashboard_file):
        monkeypatch.setenv("GLOBAL_FILTERS_LOG_LEVEL", "ERROR")

        runner.invoke(app, ["check", str(dashboard_file), "-vv"])

        assert logging_calls[0]["log_level"] == "DEBUG"
