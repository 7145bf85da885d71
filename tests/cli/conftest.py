"""CLI test fixtures."""

import json
from pathlib import Path

import pytest

DASHBOARD = {
    "sheets": [
        {
            "id": "sheet1",
            "name": "Dashboard",
            "cells": {
                "A1": '=FILTER.VALUE("Period")',
                "A2": '=FILTER.VALUE("Period")&" / "&FILTER.VALUE("Partner")',
                "B1": "Period",
            },
        }
    ],
    "globalFilters": [
        {
            "id": "f1",
            "label": "Period",
            "type": "date",
            "rangeType": "relative",
            "defaultValue": "last_month",
        },
        {"id": "f2", "label": "Partner", "type": "relation", "modelName": "res.partner"},
    ],
}


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    """Keep structlog bound to the session stream instead of the runner's."""
    monkeypatch.setattr("global_filters.cli.common.configure_logging", lambda **kwargs: None)


@pytest.fixture
def dashboard_file(tmp_path: Path) -> Path:
    path = tmp_path / "dashboard.json"
    path.write_text(json.dumps(DASHBOARD), encoding="utf-8")
    return path


@pytest.fixture
def write_document(tmp_path: Path):
    def _write(data: dict, name: str = "document.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write
