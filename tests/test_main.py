"""
Tests for CLI commands.
"""

import argparse
import json

import matplotlib
import pytest

matplotlib.use("Agg")

from liftlog.config import AppConfig, CacheConfig, PathConfig
from liftlog.main import cmd_parse, cmd_export, load_exercises
from liftlog.sheets_client import SheetsError, save_grid_to_file


def make_config(tmp_path):
    paths = PathConfig(base_dir=tmp_path, data_dir=tmp_path / "data", output_dir=tmp_path / "out")
    return AppConfig(sheets=None, cache=CacheConfig(), paths=paths)


class TestCommands:
    """Tests for command handlers."""

    def test_parse_prints_entry(self, capsys, tmp_path):
        cmd_parse(argparse.Namespace(value="10lbs/8"), make_config(tmp_path))

        data = json.loads(capsys.readouterr().out)
        assert data["reps"] == 8
        assert data["originalUnit"] == "lbs"

    def test_parse_prints_null(self, capsys, tmp_path):
        cmd_parse(argparse.Namespace(value="rest"), make_config(tmp_path))

        assert json.loads(capsys.readouterr().out) is None

    def test_load_exercises_from_snapshot(self, tmp_path):
        """Test the local snapshot is used when the API is not configured."""
        config = make_config(tmp_path)
        save_grid_to_file(
            [["Program"], [], ["", "Squat"], ["", "60/8"]], config.paths.sheet_export
        )

        exercises = load_exercises(config)

        assert exercises["Squat"].sessions[0].weight == 60

    def test_export(self, tmp_path):
        config = make_config(tmp_path)
        path = tmp_path / "sheet.tsv"
        save_grid_to_file([["Program"], [], ["", "Row"], ["", "30/12"]], path)

        cmd_export(argparse.Namespace(file=str(path), output=None), config)

        payload = json.loads((tmp_path / "out" / "exercises.json").read_text())
        assert payload["exercises"]["Row"]["sessions"][0]["reps"] == 12


class FailingClient:
    """Sheets client stand-in whose fetch always fails."""

    def __init__(self, error):
        self._error = error

    def fetch_sheet_data(self, force_refresh=False):
        raise self._error


class TestExportFailures:
    """Tests for export when the sheet cannot be loaded."""

    @pytest.mark.parametrize(
        "error", [SheetsError("auth failed"), ValueError("Invalid private key format")]
    )
    def test_upstream_failure_writes_error(self, monkeypatch, tmp_path, error):
        """Test a failed fetch leaves error.json and no exercise data."""
        config = make_config(tmp_path)
        monkeypatch.setattr("liftlog.main.make_client", lambda c: FailingClient(error))

        with pytest.raises(type(error)):
            cmd_export(argparse.Namespace(file=None, output=None), config)

        out = tmp_path / "out"
        assert json.loads((out / "error.json").read_text()) == {"error": str(error)}
        assert not (out / "exercises.json").exists()

    def test_missing_file_writes_error(self, tmp_path):
        config = make_config(tmp_path)

        with pytest.raises(FileNotFoundError):
            cmd_export(
                argparse.Namespace(file=str(tmp_path / "missing.tsv"), output=None), config
            )

        assert (tmp_path / "out" / "error.json").exists()
